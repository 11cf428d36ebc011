# newwork-server/newwork/core/redaction.py
"""
Field visibility for every stored record type.

Each field of each record is assigned exactly one visibility:

    PUBLIC    shown in the public and the full view
    PRIVATE   shown in the full view only
    INTERNAL  never leaves the service

Projection drops whole fields; it never masks part of a value and never adds
a field the record does not have.
"""
from dataclasses import fields
from enum import Enum
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel

from newwork.db.models import AbsenceRequest, DataItem, Employee, Feedback, User


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    INTERNAL = "internal"


class Tier(Enum):
    PUBLIC = "public"
    FULL = "full"


PUBLIC, PRIVATE, INTERNAL = Visibility.PUBLIC, Visibility.PRIVATE, Visibility.INTERNAL

FIELD_VISIBILITY: Dict[type, Dict[str, Visibility]] = {
    User: {
        "id": PUBLIC,
        "name": PUBLIC,
        "email": PUBLIC,
        "role": PUBLIC,
        "password_hash": INTERNAL,
    },
    Employee: {
        "id": PUBLIC,
        "name": PUBLIC,
        "email": PUBLIC,
        "position": PUBLIC,
        "department": PUBLIC,
        "hire_date": PUBLIC,
        "salary": PRIVATE,
        "phone": PRIVATE,
        "address": PRIVATE,
        "manager_id": PRIVATE,
    },
    DataItem: {
        "id": PUBLIC,
        "title": PUBLIC,
        "description": PUBLIC,
        "owner_id": PUBLIC,
        "is_deleted": PUBLIC,
        "created_at": PUBLIC,
        "updated_at": PUBLIC,
    },
    Feedback: {
        "id": PUBLIC,
        "target_id": PUBLIC,
        "from_user_id": PUBLIC,
        "content": PUBLIC,
        "polished_content": PUBLIC,
        "created_at": PUBLIC,
    },
    AbsenceRequest: {
        "id": PUBLIC,
        "user_id": PUBLIC,
        "start_date": PUBLIC,
        "end_date": PUBLIC,
        "reason": PUBLIC,
        "status": PUBLIC,
        "created_at": PUBLIC,
    },
}

_SHOWN = {
    Tier.PUBLIC: {Visibility.PUBLIC},
    Tier.FULL: {Visibility.PUBLIC, Visibility.PRIVATE},
}


def _check_complete() -> None:
    for record_type, table in FIELD_VISIBILITY.items():
        declared = {f.name for f in fields(record_type)}
        if declared != set(table):
            missing = sorted(declared - set(table))
            extra = sorted(set(table) - declared)
            raise RuntimeError(
                f"Visibility table for {record_type.__name__} is out of date "
                f"(missing: {missing}, unknown: {extra})"
            )


_check_complete()


def visible_fields(record_type: type, tier: Tier) -> set:
    shown = _SHOWN[tier]
    return {name for name, vis in FIELD_VISIBILITY[record_type].items() if vis in shown}


def project(record: Any, tier: Tier) -> Dict[str, Any]:
    names = visible_fields(type(record), tier)
    return {f.name: getattr(record, f.name) for f in fields(record) if f.name in names}


V = TypeVar("V", bound=BaseModel)


def to_view(record: Any, view: Type[V], tier: Tier = Tier.FULL) -> V:
    return view(**project(record, tier))
