import threading
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from newwork.core.enums import AbsenceStatus, Role
from newwork.core.exceptions import Conflict, Forbidden, InvalidInput, NotFound, Unauthenticated
from newwork.core.policy import Principal
from newwork.schemas.absence import AbsenceCreate
from newwork.services.absences import AbsenceService


def request_body(**overrides):
    body = dict(
        start_date=datetime(2026, 11, 2, tzinfo=timezone.utc),
        end_date=datetime(2026, 11, 6, tzinfo=timezone.utc),
        reason="Family trip",
    )
    body.update(overrides)
    return AbsenceCreate(**body)


@pytest.fixture
def service(db):
    return AbsenceService(db)


def test_employee_files_request_for_themselves(service, employee):
    absence = service.create(employee, request_body())
    assert absence.user_id == "2"
    assert absence.status is AbsenceStatus.PENDING


@pytest.mark.parametrize("who", ["manager", "coworker"])
def test_only_employees_file_requests(service, who, request):
    with pytest.raises(Forbidden):
        service.create(request.getfixturevalue(who), request_body())


def test_dates_must_be_ordered(service, employee):
    with pytest.raises(InvalidInput):
        service.create(employee, request_body(end_date=datetime(2026, 11, 1, tzinfo=timezone.utc)))


def test_reason_required(service, employee):
    with pytest.raises(InvalidInput):
        service.create(employee, request_body(reason="   "))


def test_account_must_still_exist(service):
    ghost = Principal(id="gone", email="gone@newwork.com", role=Role.EMPLOYEE)
    with pytest.raises(Unauthenticated):
        service.create(ghost, request_body())


def test_listing(service, db, manager, employee, coworker):
    other = Principal(id="4", email="alex@newwork.com", role=Role.EMPLOYEE)
    mine = service.create(employee, request_body())
    service.create(other, request_body(reason="Dentist"))

    assert [a.id for a in service.list_mine(employee)] == [mine.id]
    assert len(service.list_all(manager)) == 2
    with pytest.raises(Forbidden):
        service.list_all(employee)
    with pytest.raises(Forbidden):
        service.list_mine(coworker)


def test_manager_decides_once(service, manager, employee):
    absence = service.create(employee, request_body())

    approved = service.update_status(manager, absence.id, AbsenceStatus.APPROVED)
    assert approved.status is AbsenceStatus.APPROVED

    for status in AbsenceStatus:
        with pytest.raises((Conflict, InvalidInput)):
            service.update_status(manager, absence.id, status)
    assert service.list_mine(employee)[0].status is AbsenceStatus.APPROVED


def test_cannot_move_back_to_pending(service, manager, employee):
    absence = service.create(employee, request_body())
    with pytest.raises(InvalidInput):
        service.update_status(manager, absence.id, AbsenceStatus.PENDING)


def test_only_managers_decide(service, employee, coworker):
    absence = service.create(employee, request_body())
    for p in (employee, coworker):
        with pytest.raises(Forbidden):
            service.update_status(p, absence.id, AbsenceStatus.APPROVED)


def test_unknown_request(service, manager):
    with pytest.raises(NotFound):
        service.update_status(manager, "nope", AbsenceStatus.REJECTED)


def test_concurrent_decisions_have_one_winner(service, manager, employee):
    absence = service.create(employee, request_body())
    barrier = threading.Barrier(2)
    outcomes = []

    def decide(status):
        barrier.wait()
        try:
            outcomes.append(service.update_status(manager, absence.id, status).status)
        except Conflict:
            outcomes.append("conflict")

    threads = [
        threading.Thread(target=decide, args=(AbsenceStatus.APPROVED,)),
        threading.Thread(target=decide, args=(AbsenceStatus.REJECTED,)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert outcomes.count("conflict") == 1
    winner = next(o for o in outcomes if o != "conflict")
    assert service.list_mine(employee)[0].status is winner


@pytest.mark.parametrize("value", ["2026-11-05T00:00:00", "2026-11-05"])
def test_dates_need_a_timezone(value):
    with pytest.raises(ValidationError):
        AbsenceCreate(start_date="2026-11-02T00:00:00Z", end_date=value, reason="Family trip")


def test_dates_in_different_offsets_compare(service, employee):
    absence = service.create(employee, AbsenceCreate(
        start_date="2026-11-02T09:00:00+02:00", end_date="2026-11-02T08:00:00Z", reason="Dentist",
    ))
    assert absence.end_date > absence.start_date
