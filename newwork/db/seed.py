# newwork-server/newwork/db/seed.py
# Demo accounts so a fresh instance can be logged into straight away.
import logging
from datetime import timedelta

from newwork.core.enums import Role
from newwork.core.security import get_password_hash
from newwork.db.models import Employee, User, utcnow
from newwork.db.store import Database

logger = logging.getLogger(__name__)


def seed_demo_data(db: Database, password: str) -> None:
    logger.info("Seeding demo data...")
    seed_default_users(db, password)
    seed_default_employees(db)
    logger.info("Demo data ready")


def seed_default_users(db: Database, password: str) -> None:
    if len(db.users):
        logger.info("Users already seeded, skipping...")
        return

    password_hash = get_password_hash(password)
    for user in (
        User(id="1", name="John Manager", email="manager@newwork.com", password_hash=password_hash, role=Role.MANAGER),
        User(id="2", name="Jane Employee", email="employee@newwork.com", password_hash=password_hash, role=Role.EMPLOYEE),
        User(id="3", name="Bob Coworker", email="coworker@newwork.com", password_hash=password_hash, role=Role.COWORKER),
    ):
        db.users.add(user)
    logger.info("Seeded %d default users", len(db.users))


def seed_default_employees(db: Database) -> None:
    if len(db.employees):
        logger.info("Employees already seeded, skipping...")
        return

    now = utcnow()
    db.employees.add(Employee(
        id="1", name="John Manager", email="manager@newwork.com",
        position="Engineering Manager", department="Engineering",
        salary=120000.0, phone="+1-555-0101", address="123 Tech St, San Francisco, CA",
        hire_date=now - timedelta(days=365),
    ))
    db.employees.add(Employee(
        id="2", name="Jane Employee", email="employee@newwork.com",
        position="Software Engineer", department="Engineering",
        salary=95000.0, phone="+1-555-0102", address="456 Dev Ave, San Francisco, CA",
        hire_date=now - timedelta(days=180), manager_id="1",
    ))
    logger.info("Seeded %d default employees", len(db.employees))
