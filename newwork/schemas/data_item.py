# newwork-server/newwork/schemas/data_item.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class DataItem(BaseModel):
    id: str
    title: str
    description: str
    owner_id: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class DataItemCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    # Only managers may hand an item to somebody else
    owner_id: Optional[str] = None


class DataItemUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    is_deleted: Optional[bool] = None
