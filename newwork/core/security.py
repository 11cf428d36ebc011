# newwork-server/newwork/core/security.py
# Handles password hashing, JWTs and turning a bearer token into a Principal.
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from newwork.core.config import settings
from newwork.core.enums import Role
from newwork.core.exceptions import Unauthenticated
from newwork.core.policy import Principal
from newwork.db.models import User
from newwork.db.store import Database
from newwork.schemas import token as token_schema

logger = logging.getLogger(__name__)

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
def verify_password(plain: str, hashed: str) -> bool: return pwd_context.verify(plain, hashed)
def get_password_hash(pwd: str) -> str: return pwd_context.hash(pwd)

# --- JWT Creation ---
def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": user.id, "email": user.email, "role": user.role.value, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def resolve_principal(token: Optional[str]) -> Principal:
    """
    Verifies signature and expiry and builds the Principal from the claims.
    Stateless: the user store is not consulted.
    """
    if not token:
        raise Unauthenticated("Not authenticated")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.info("Rejected token: %s", exc)
        raise Unauthenticated()

    # jose only checks exp when it is present
    if "exp" not in payload:
        raise Unauthenticated()
    try:
        token_data = token_schema.TokenData(**payload)
        role = Role(token_data.role)
    except (ValidationError, ValueError):
        raise Unauthenticated()
    return Principal(id=token_data.sub, email=token_data.email, role=role)


def authenticate(db: Database, email: str, password: str) -> User:
    """
    Unknown e-mail and wrong password raise the same error, and both paths run
    one hash verification so the response time does not tell them apart.
    """
    user = db.users.find(lambda u: u.email.lower() == email.lower())
    if user is None:
        pwd_context.dummy_verify()
        logger.info("Login failed for unknown account")
        raise Unauthenticated("Incorrect email or password")
    if not verify_password(password, user.password_hash):
        logger.info("Login failed for user %s", user.id)
        raise Unauthenticated("Incorrect email or password")
    return user


# --- Principal Dependency ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)

def get_current_principal(token: Optional[str] = Depends(oauth2_scheme)) -> Principal:
    return resolve_principal(token)
