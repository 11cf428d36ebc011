import pytest
from fastapi.testclient import TestClient

from newwork.core.enums import Role
from newwork.core.policy import Principal
from newwork.db.models import Employee, User, utcnow
from newwork.db.seed import seed_demo_data
from newwork.db.store import Database
from newwork.main import create_app

PASSWORD = "password123"


class FakePolisher:
    """Stands in for the text model; remembers what it was asked."""

    def __init__(self, db=None):
        self.db = db
        self.calls = []
        self.stored_during_call = []

    async def polish(self, content):
        self.calls.append(content)
        if self.db is not None:
            self.stored_during_call.append(len(self.db.feedbacks))
        return f"Polished: {content}"


@pytest.fixture
def db():
    database = Database()
    seed_demo_data(database, PASSWORD)
    # A second employee, so "someone else's record" exists for employee 2
    database.users.add(User(id="4", name="Alex Employee", email="alex@newwork.com", password_hash="x", role=Role.EMPLOYEE))
    database.employees.add(Employee(
        id="4", name="Alex Employee", email="alex@newwork.com", position="QA Engineer",
        department="Engineering", hire_date=utcnow(), salary=80000.0, phone="+1-555-0104",
        address="789 Test Rd", manager_id="1",
    ))
    return database


@pytest.fixture
def manager():
    return Principal(id="1", email="manager@newwork.com", role=Role.MANAGER)


@pytest.fixture
def employee():
    return Principal(id="2", email="employee@newwork.com", role=Role.EMPLOYEE)


@pytest.fixture
def coworker():
    return Principal(id="3", email="coworker@newwork.com", role=Role.COWORKER)


@pytest.fixture
def client():
    app = create_app(seed=True)
    app.state.polisher = FakePolisher()
    return TestClient(app)


def login(client, email, password=PASSWORD):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
