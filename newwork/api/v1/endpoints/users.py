# newwork-server/newwork/api/v1/endpoints/users.py
from typing import List

from fastapi import APIRouter, Depends, status

from newwork.core import security
from newwork.core.policy import Principal
from newwork.db import session
from newwork.db.store import Database
from newwork.schemas import user as user_schema
from newwork.services.users import UserService

router = APIRouter()

@router.get("/me", response_model=user_schema.UserInfo)
def read_user_me(
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """
    Get the details for the currently logged-in user.
    """
    return UserService(db).me(principal)

@router.get("", response_model=List[user_schema.UserInfo])
def list_users(
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Retrieves a list of all users. Managers only. """
    return UserService(db).list(principal)

@router.post("", response_model=user_schema.UserInfo, status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: user_schema.UserCreate,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Creates a new account, and a profile for managers and employees. """
    return UserService(db).create(principal, user_in)
