# newwork-server/newwork/services/absences.py
import logging
from typing import List

from newwork.core.enums import AbsenceStatus
from newwork.core.exceptions import Conflict, InvalidInput, NotFound, Unauthenticated
from newwork.core.policy import Operation, Principal, Resource
from newwork.core.redaction import to_view
from newwork.db.models import AbsenceRequest
from newwork.db.store import Database
from newwork.schemas import absence as schemas
from newwork.services.base import authorize, fetch_authorized, require_scope

logger = logging.getLogger(__name__)

DECISIONS = (AbsenceStatus.APPROVED, AbsenceStatus.REJECTED)


def _subject(absence: AbsenceRequest) -> str:
    return absence.user_id


class AbsenceService:
    def __init__(self, db: Database):
        self.db = db

    def create(self, principal: Principal, absence_in: schemas.AbsenceCreate) -> schemas.AbsenceRequest:
        # The subject is always the caller; the body cannot name anyone else
        authorize(principal, Operation.CREATE, Resource.ABSENCE, principal.id)
        if absence_in.end_date < absence_in.start_date:
            raise InvalidInput("end_date must not be before start_date")
        reason = absence_in.reason.strip()
        if not reason:
            raise InvalidInput("reason must not be empty")

        # Users and absences are locked separately, so an account removed
        # between these two steps can still end up with a request.
        if self.db.users.get(principal.id) is None:
            raise Unauthenticated("User no longer exists")

        absence = self.db.absences.add(AbsenceRequest(
            user_id=principal.id,
            start_date=absence_in.start_date,
            end_date=absence_in.end_date,
            reason=reason,
        ))
        logger.info("User %s requested absence %s", principal.id, absence.id)
        return to_view(absence, schemas.AbsenceRequest)

    def list_mine(self, principal: Principal) -> List[schemas.AbsenceRequest]:
        authorize(principal, Operation.READ, Resource.ABSENCE, principal.id)
        mine = self.db.absences.filter(lambda a: a.user_id == principal.id)
        return [to_view(a, schemas.AbsenceRequest) for a in sorted(mine, key=lambda a: a.created_at)]

    def list_all(self, principal: Principal) -> List[schemas.AbsenceRequest]:
        require_scope(principal, Operation.LIST, Resource.ABSENCE)
        everything = sorted(self.db.absences.all(), key=lambda a: a.created_at)
        return [to_view(a, schemas.AbsenceRequest) for a in everything]

    def update_status(self, principal: Principal, absence_id: str, status: AbsenceStatus) -> schemas.AbsenceRequest:
        """
        Approves or rejects a pending request. The pending check and the write
        happen under one lock, so of two concurrent decisions exactly one wins.
        """
        fetch_authorized(principal, Operation.UPDATE_STATUS, Resource.ABSENCE, self.db.absences, absence_id, _subject)
        if status not in DECISIONS:
            raise InvalidInput("status must be 'approved' or 'rejected'")

        def decide(absence: AbsenceRequest) -> None:
            if absence.status != AbsenceStatus.PENDING:
                raise Conflict(f"Absence request is already {absence.status.value}")
            absence.status = status

        absence = self.db.absences.update(absence_id, decide)
        if absence is None:
            raise NotFound("AbsenceRequest not found")
        logger.info("User %s set absence %s to %s", principal.id, absence_id, status.value)
        return to_view(absence, schemas.AbsenceRequest)
