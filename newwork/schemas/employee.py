# newwork-server/newwork/schemas/employee.py
from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import Optional


class EmployeePublic(BaseModel):
    """What any colleague may see."""
    id: str
    name: str
    email: str
    position: str
    department: str
    hire_date: datetime


class EmployeeFull(EmployeePublic):
    """Owner and manager view, including the sensitive fields."""
    salary: Optional[float] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    manager_id: Optional[str] = None


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    position: Optional[str] = None
    department: Optional[str] = None
    salary: Optional[float] = None
    phone: Optional[str] = None
    address: Optional[str] = None
