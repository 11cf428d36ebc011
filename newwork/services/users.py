# newwork-server/newwork/services/users.py
import logging
from typing import List

from newwork.core.enums import Role
from newwork.core.exceptions import InvalidInput, NotFound
from newwork.core.policy import Operation, Principal, Resource
from newwork.core.redaction import to_view
from newwork.core.security import get_password_hash
from newwork.db.models import Employee, User, new_id, utcnow
from newwork.db.store import Database
from newwork.schemas.user import UserCreate, UserInfo
from newwork.services.base import authorize, require_scope

logger = logging.getLogger(__name__)

# Coworkers are outside the org chart and get no profile
PROFILE_ROLES = (Role.MANAGER, Role.EMPLOYEE)


class UserService:
    def __init__(self, db: Database):
        self.db = db

    def me(self, principal: Principal) -> UserInfo:
        authorize(principal, Operation.READ, Resource.USER_ACCOUNT, principal.id)
        user = self.db.users.get(principal.id)
        if user is None:
            raise NotFound("User not found")
        return to_view(user, UserInfo)

    def list(self, principal: Principal) -> List[UserInfo]:
        require_scope(principal, Operation.LIST, Resource.USER_ACCOUNT)
        return [to_view(u, UserInfo) for u in sorted(self.db.users.all(), key=lambda u: u.name)]

    def create(self, principal: Principal, user_in: UserCreate) -> UserInfo:
        """Creates a login account, plus an employee profile for managers and employees."""
        authorize(principal, Operation.CREATE, Resource.USER_ACCOUNT, None)
        if user_in.manager_id is not None and self.db.users.get(user_in.manager_id) is None:
            raise InvalidInput(f"Manager '{user_in.manager_id}' does not exist")

        user = User(
            id=new_id(), name=user_in.name, email=user_in.email,
            password_hash=get_password_hash(user_in.password), role=user_in.role,
        )
        self.db.users.add(user, unique=lambda u: u.email.lower())

        if user.role in PROFILE_ROLES:
            self.db.employees.add(Employee(
                id=user.id, name=user.name, email=user.email,
                position=user_in.position, department=user_in.department,
                hire_date=utcnow(), salary=user_in.salary, phone=user_in.phone,
                address=user_in.address, manager_id=user_in.manager_id,
            ))
        logger.info("User %s created %s account %s", principal.id, user.role.value, user.id)
        return to_view(user, UserInfo)
