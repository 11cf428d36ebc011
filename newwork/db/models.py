# newwork-server/newwork/db/models.py
# Stored records. Owner references are always User ids.
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid

from newwork.core.enums import AbsenceStatus, Role


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    id: str
    name: str
    email: str
    password_hash: str
    role: Role


@dataclass
class Employee:
    id: str
    name: str
    email: str
    position: str
    department: str
    hire_date: datetime
    salary: Optional[float] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    manager_id: Optional[str] = None


@dataclass
class DataItem:
    title: str
    description: str
    owner_id: str
    id: str = field(default_factory=new_id)
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class Feedback:
    target_id: str
    from_user_id: str
    content: str
    polished_content: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class AbsenceRequest:
    user_id: str
    start_date: datetime
    end_date: datetime
    reason: str
    status: AbsenceStatus = AbsenceStatus.PENDING
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
