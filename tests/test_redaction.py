from dataclasses import fields
from datetime import datetime, timezone

import pytest

from newwork.core.redaction import FIELD_VISIBILITY, Tier, Visibility, project, to_view, visible_fields
from newwork.db.models import AbsenceRequest, DataItem, Employee, Feedback, User
from newwork.schemas.absence import AbsenceRequest as AbsenceView
from newwork.schemas.data_item import DataItem as DataItemView
from newwork.schemas.employee import EmployeeFull, EmployeePublic
from newwork.schemas.feedback import Feedback as FeedbackView
from newwork.schemas.user import UserInfo

SENSITIVE = {"salary", "phone", "address"}


def make_employee():
    return Employee(
        id="2", name="Jane Employee", email="employee@newwork.com", position="Software Engineer",
        department="Engineering", hire_date=datetime(2025, 4, 1, tzinfo=timezone.utc),
        salary=95000.0, phone="+1-555-0102", address="456 Dev Ave", manager_id="1",
    )


@pytest.mark.parametrize("record_type", [User, Employee, DataItem, Feedback, AbsenceRequest])
def test_every_field_has_exactly_one_visibility(record_type):
    table = FIELD_VISIBILITY[record_type]
    assert set(table) == {f.name for f in fields(record_type)}
    assert all(isinstance(v, Visibility) for v in table.values())


@pytest.mark.parametrize("view,record_type,tier", [
    (EmployeePublic, Employee, Tier.PUBLIC),
    (EmployeeFull, Employee, Tier.FULL),
    (UserInfo, User, Tier.FULL),
    (DataItemView, DataItem, Tier.FULL),
    (FeedbackView, Feedback, Tier.FULL),
    (AbsenceView, AbsenceRequest, Tier.FULL),
])
def test_view_models_match_their_tier(view, record_type, tier):
    assert set(view.model_fields) == visible_fields(record_type, tier)


def test_public_projection_strips_sensitive_fields():
    public = project(make_employee(), Tier.PUBLIC)
    assert not SENSITIVE & set(public)


def test_projections_are_subsets_with_unchanged_values():
    employee = make_employee()
    full = {f.name: getattr(employee, f.name) for f in fields(employee)}
    for tier in Tier:
        projected = project(employee, tier)
        assert set(projected) <= set(full)
        assert all(projected[name] == full[name] for name in projected)
    assert set(project(employee, Tier.PUBLIC)) < set(project(employee, Tier.FULL))


def test_password_hash_never_projected():
    user = User(id="1", name="John", email="manager@newwork.com", password_hash="secret", role="manager")
    for tier in Tier:
        assert "password_hash" not in project(user, tier)


def test_to_view_builds_typed_models():
    view = to_view(make_employee(), EmployeePublic, Tier.PUBLIC)
    assert type(view) is EmployeePublic
    assert "salary" not in view.model_dump()
    full = to_view(make_employee(), EmployeeFull)
    assert full.salary == 95000.0
