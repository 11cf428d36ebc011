# newwork-server/newwork/core/enums.py
from enum import Enum


class Role(str, Enum):
    MANAGER = "manager"
    EMPLOYEE = "employee"
    COWORKER = "coworker"


class AbsenceStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
