# newwork-server/newwork/services/base.py
import logging
from typing import Callable, Optional, Tuple, TypeVar

from newwork.core import policy
from newwork.core.exceptions import Forbidden, NotFound
from newwork.core.policy import Decision, Operation, Principal, Resource, Scope
from newwork.db.store import Collection

logger = logging.getLogger(__name__)

T = TypeVar("T")


def require_scope(principal: Principal, operation: Operation, resource: Resource) -> Scope:
    """Fails early when the role can never perform ``operation`` on ``resource``."""
    reach = policy.scope(principal, operation, resource)
    if reach is Scope.NONE:
        logger.info("Denied %s %s %s to %s", principal.role.value, operation.value, resource.value, principal.id)
        raise Forbidden()
    return reach


def authorize(
    principal: Principal,
    operation: Operation,
    resource: Resource,
    owner_id: Optional[str],
) -> Decision:
    decision = policy.decide(principal, operation, resource, owner_id)
    if not decision.allowed:
        logger.info("Denied %s %s %s to %s", principal.role.value, operation.value, resource.value, principal.id)
        raise Forbidden()
    return decision


def fetch_authorized(
    principal: Principal,
    operation: Operation,
    resource: Resource,
    collection: Collection[T],
    key: str,
    owner_of: Callable[[T], str],
) -> Tuple[T, Decision]:
    """
    Loads ``key`` from ``collection`` and checks the policy against it.

    A missing record is reported as NotFound only to callers who could have
    seen it had it existed without owning it (scope ALL), or when the key is
    the caller's own id. Everybody else gets Forbidden so ids cannot be probed.
    """
    reach = require_scope(principal, operation, resource)
    record = collection.get(key)
    if record is None:
        if reach is Scope.ALL or key == principal.id:
            raise NotFound(f"{collection.name} not found")
        raise Forbidden()
    return record, authorize(principal, operation, resource, owner_of(record))
