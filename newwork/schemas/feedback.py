# newwork-server/newwork/schemas/feedback.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class Feedback(BaseModel):
    id: str
    target_id: str
    from_user_id: str
    content: str
    polished_content: Optional[str] = None
    created_at: datetime


class FeedbackCreate(BaseModel):
    target_id: str
    content: str = Field(min_length=1)
    polish: bool = False
