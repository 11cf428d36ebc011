# newwork-server/newwork/schemas/token.py
from pydantic import BaseModel

from newwork.schemas.user import UserInfo


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserInfo


class TokenData(BaseModel):
    sub: str
    email: str
    role: str
