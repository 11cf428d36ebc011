# newwork-server/newwork/schemas/absence.py
from pydantic import AwareDatetime, BaseModel
from datetime import datetime

from newwork.core.enums import AbsenceStatus


class AbsenceRequest(BaseModel):
    id: str
    user_id: str
    start_date: datetime
    end_date: datetime
    reason: str
    status: AbsenceStatus
    created_at: datetime


class AbsenceCreate(BaseModel):
    # Naive timestamps and bare dates are rejected; requests carry an offset
    start_date: AwareDatetime
    end_date: AwareDatetime
    reason: str


class AbsenceStatusUpdate(BaseModel):
    status: AbsenceStatus
