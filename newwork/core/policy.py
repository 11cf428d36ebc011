# newwork-server/newwork/core/policy.py
"""
Authorization engine.

Pure functions, no I/O: given who is asking, what they want to do and who
owns the record, answer ALLOW, ALLOW_REDACTED or DENY.

The rules are a table keyed by (resource, operation). Each cell lists, per
role, the grants that role holds:

    FULL      any record, full view
    REDACTED  any record, public view only
    OWN       only records owned by the principal, full view

A role may hold more than one grant for a cell; the most permissive one that
applies wins. Anything not in the table is denied.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from newwork.core.enums import Role


@dataclass(frozen=True)
class Principal:
    id: str
    email: str
    role: Role


class Operation(str, Enum):
    READ = "read"
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    UPDATE_STATUS = "update_status"


class Resource(str, Enum):
    PROFILE = "profile"
    DATA_ITEM = "data_item"
    FEEDBACK = "feedback"
    ABSENCE = "absence"
    USER_ACCOUNT = "user_account"


class Grant(Enum):
    FULL = "full"
    REDACTED = "redacted"
    OWN = "own"


class Decision(Enum):
    ALLOW = "allow"
    ALLOW_REDACTED = "allow_redacted"
    DENY = "deny"

    @property
    def allowed(self) -> bool:
        return self is not Decision.DENY


class Scope(Enum):
    ALL = "all"
    OWN = "own"
    NONE = "none"


FULL, REDACTED, OWN = Grant.FULL, Grant.REDACTED, Grant.OWN
MANAGER, EMPLOYEE, COWORKER = Role.MANAGER, Role.EMPLOYEE, Role.COWORKER

RULES: Dict[Tuple[Resource, Operation], Dict[Role, Tuple[Grant, ...]]] = {
    # Employee profiles. A profile is owned by the user with the same id.
    (Resource.PROFILE, Operation.READ): {MANAGER: (FULL,), EMPLOYEE: (OWN,), COWORKER: (REDACTED, OWN)},
    (Resource.PROFILE, Operation.LIST): {MANAGER: (FULL,), EMPLOYEE: (OWN,), COWORKER: (REDACTED, OWN)},
    (Resource.PROFILE, Operation.UPDATE): {MANAGER: (FULL,), EMPLOYEE: (OWN,)},
    # Data items. Coworkers may look at everything but never write.
    (Resource.DATA_ITEM, Operation.READ): {MANAGER: (FULL,), EMPLOYEE: (OWN,), COWORKER: (FULL,)},
    (Resource.DATA_ITEM, Operation.LIST): {MANAGER: (FULL,), EMPLOYEE: (OWN,), COWORKER: (FULL,)},
    (Resource.DATA_ITEM, Operation.CREATE): {MANAGER: (FULL,), EMPLOYEE: (OWN,)},
    (Resource.DATA_ITEM, Operation.UPDATE): {MANAGER: (FULL,), EMPLOYEE: (OWN,)},
    (Resource.DATA_ITEM, Operation.DELETE): {MANAGER: (FULL,), EMPLOYEE: (OWN,)},
    # Feedback is written by peers, read by managers and by the person it is about.
    (Resource.FEEDBACK, Operation.CREATE): {EMPLOYEE: (FULL,), COWORKER: (FULL,)},
    (Resource.FEEDBACK, Operation.READ): {MANAGER: (FULL,), EMPLOYEE: (OWN,), COWORKER: (OWN,)},
    # Absence requests. The subject is always the requesting principal.
    (Resource.ABSENCE, Operation.CREATE): {EMPLOYEE: (OWN,)},
    (Resource.ABSENCE, Operation.READ): {MANAGER: (FULL,), EMPLOYEE: (OWN,)},
    (Resource.ABSENCE, Operation.LIST): {MANAGER: (FULL,)},
    (Resource.ABSENCE, Operation.UPDATE_STATUS): {MANAGER: (FULL,)},
    # Login accounts
    (Resource.USER_ACCOUNT, Operation.CREATE): {MANAGER: (FULL,)},
    (Resource.USER_ACCOUNT, Operation.LIST): {MANAGER: (FULL,)},
    (Resource.USER_ACCOUNT, Operation.READ): {MANAGER: (FULL,), EMPLOYEE: (OWN,), COWORKER: (OWN,)},
}


def grants_for(principal: Principal, operation: Operation, resource: Resource) -> Tuple[Grant, ...]:
    return RULES.get((resource, operation), {}).get(principal.role, ())


def decide(
    principal: Principal,
    operation: Operation,
    resource: Resource,
    owner_id: Optional[str] = None,
) -> Decision:
    """
    Decides a single request against a single record.

    ``owner_id`` is the owner of the record in question (or, for creation,
    the owner the new record would get). It is compared with the principal's
    own id, never with anything the client claims about itself.
    """
    decision = Decision.DENY
    for grant in grants_for(principal, operation, resource):
        if grant is Grant.FULL:
            return Decision.ALLOW
        if grant is Grant.OWN and owner_id is not None and owner_id == principal.id:
            return Decision.ALLOW
        if grant is Grant.REDACTED:
            decision = Decision.ALLOW_REDACTED
    return decision


def scope(principal: Principal, operation: Operation, resource: Resource) -> Scope:
    """What the role can reach for this operation, before looking at any record."""
    grants = grants_for(principal, operation, resource)
    if Grant.FULL in grants or Grant.REDACTED in grants:
        return Scope.ALL
    if Grant.OWN in grants:
        return Scope.OWN
    return Scope.NONE
