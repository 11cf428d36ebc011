from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from newwork.core import security
from newwork.core.config import settings
from newwork.core.enums import Role
from newwork.core.exceptions import Unauthenticated
from conftest import PASSWORD


def encode(claims, key=None):
    return jwt.encode(claims, key or settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def future():
    return datetime.now(timezone.utc) + timedelta(hours=1)


def test_token_round_trip_gives_principal(db):
    user = db.users.get("2")
    principal = security.resolve_principal(security.create_access_token(user))
    assert principal.id == "2"
    assert principal.email == "employee@newwork.com"
    assert principal.role is Role.EMPLOYEE


def test_token_lifetime_is_one_day(db):
    token = security.create_access_token(db.users.get("1"))
    claims = jwt.get_unverified_claims(token)
    lifetime = claims["exp"] - datetime.now(timezone.utc).timestamp()
    assert 23 * 3600 < lifetime <= 24 * 3600


@pytest.mark.parametrize("token", [
    None,
    "",
    "not-a-token",
    "a.b.c",
])
def test_missing_or_malformed_token(token):
    with pytest.raises(Unauthenticated):
        security.resolve_principal(token)


def test_expired_token(db):
    token = security.create_access_token(db.users.get("1"), expires_delta=timedelta(seconds=-5))
    with pytest.raises(Unauthenticated):
        security.resolve_principal(token)


def test_bad_signature():
    token = encode({"sub": "1", "email": "manager@newwork.com", "role": "manager", "exp": future()}, key="other")
    with pytest.raises(Unauthenticated):
        security.resolve_principal(token)


def test_unknown_role_is_rejected():
    token = encode({"sub": "1", "email": "manager@newwork.com", "role": "admin", "exp": future()})
    with pytest.raises(Unauthenticated):
        security.resolve_principal(token)


@pytest.mark.parametrize("missing", ["sub", "email", "role", "exp"])
def test_required_claims(missing):
    claims = {"sub": "1", "email": "manager@newwork.com", "role": "manager", "exp": future()}
    del claims[missing]
    with pytest.raises(Unauthenticated):
        security.resolve_principal(encode(claims))


def test_authenticate_success(db):
    user = security.authenticate(db, "Manager@NewWork.com", PASSWORD)
    assert user.id == "1"


def test_unknown_email_and_wrong_password_look_the_same(db):
    with pytest.raises(Unauthenticated) as unknown:
        security.authenticate(db, "nobody@newwork.com", PASSWORD)
    with pytest.raises(Unauthenticated) as wrong:
        security.authenticate(db, "manager@newwork.com", "wrong-password")
    assert unknown.value.detail == wrong.value.detail
    assert unknown.value.status_code == wrong.value.status_code


def test_password_hash_is_salted():
    first = security.get_password_hash(PASSWORD)
    second = security.get_password_hash(PASSWORD)
    assert first != second
    assert security.verify_password(PASSWORD, first)
    assert not security.verify_password("nope", first)
