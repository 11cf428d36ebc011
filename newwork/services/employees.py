# newwork-server/newwork/services/employees.py
from typing import List, Union

from newwork.core import policy
from newwork.core.exceptions import NotFound
from newwork.core.policy import Decision, Operation, Principal, Resource
from newwork.core.redaction import Tier, to_view
from newwork.db.models import Employee, User
from newwork.db.store import Database
from newwork.schemas.employee import EmployeeFull, EmployeePublic, EmployeeUpdate
from newwork.services.base import fetch_authorized, require_scope

EmployeeView = Union[EmployeeFull, EmployeePublic]


def _profile_owner(employee: Employee) -> str:
    return employee.id


def employee_view(employee: Employee, decision: Decision) -> EmployeeView:
    if decision is Decision.ALLOW:
        return to_view(employee, EmployeeFull, Tier.FULL)
    return to_view(employee, EmployeePublic, Tier.PUBLIC)


class EmployeeService:
    def __init__(self, db: Database):
        self.db = db

    def get(self, principal: Principal, employee_id: str) -> EmployeeView:
        employee, decision = fetch_authorized(
            principal, Operation.READ, Resource.PROFILE, self.db.employees, employee_id, _profile_owner
        )
        return employee_view(employee, decision)

    def list(self, principal: Principal) -> List[EmployeeView]:
        """The directory: every profile the principal may see, in the tier they may see it."""
        require_scope(principal, Operation.LIST, Resource.PROFILE)
        views = []
        for employee in sorted(self.db.employees.all(), key=lambda e: e.name):
            decision = policy.decide(principal, Operation.LIST, Resource.PROFILE, employee.id)
            if decision.allowed:
                views.append(employee_view(employee, decision))
        return views

    def update(self, principal: Principal, employee_id: str, updates: EmployeeUpdate) -> EmployeeFull:
        fetch_authorized(
            principal, Operation.UPDATE, Resource.PROFILE, self.db.employees, employee_id, _profile_owner
        )
        changes = updates.model_dump(exclude_unset=True)
        if changes.get("email") is not None:
            self._move_login_email(employee_id, changes["email"])

        def apply(employee: Employee) -> None:
            for name, value in changes.items():
                # Explicit nulls keep the current value; use a new value to change a field
                if value is not None:
                    setattr(employee, name, value)

        updated = self.db.employees.update(employee_id, apply)
        if updated is None:
            raise NotFound("Employee not found")
        return to_view(updated, EmployeeFull, Tier.FULL)

    def _move_login_email(self, user_id: str, email: str) -> None:
        """The profile e-mail is the login e-mail; the account changes first so a clash leaves both untouched."""

        def set_email(user: User) -> None:
            user.email = email

        if self.db.users.update(user_id, set_email, unique=lambda u: u.email.lower()) is None:
            raise NotFound("User not found")
