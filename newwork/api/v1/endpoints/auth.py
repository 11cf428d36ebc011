# newwork-server/newwork/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends

from newwork.core import security
from newwork.core.redaction import to_view
from newwork.db import session
from newwork.db.store import Database
from newwork.schemas import token as token_schema
from newwork.schemas import user as user_schema

router = APIRouter()

@router.post("/login", response_model=token_schema.Token)
def login(credentials: user_schema.LoginRequest, db: Database = Depends(session.get_db)):
    user = security.authenticate(db, credentials.email, credentials.password)
    access_token = security.create_access_token(user)
    return token_schema.Token(token=access_token, user=to_view(user, user_schema.UserInfo))
