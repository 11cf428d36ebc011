# newwork-server/newwork/schemas/user.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from newwork.core.enums import Role


class UserBase(BaseModel):
    name: str
    email: str


class UserCreate(UserBase):
    email: EmailStr
    password: str = Field(min_length=8)
    role: Role
    # Profile fields, used when the new account is a manager or an employee
    position: str = ""
    department: str = ""
    salary: Optional[float] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    manager_id: Optional[str] = None


class UserInfo(UserBase):
    id: str
    role: Role

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: str
    password: str
