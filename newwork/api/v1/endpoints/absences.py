# newwork-server/newwork/api/v1/endpoints/absences.py
from typing import List

from fastapi import APIRouter, Depends, status

from newwork.core import security
from newwork.core.policy import Principal
from newwork.db import session
from newwork.db.store import Database
from newwork.schemas import absence as absence_schema
from newwork.services.absences import AbsenceService

router = APIRouter()

@router.post("", response_model=absence_schema.AbsenceRequest, status_code=status.HTTP_201_CREATED)
def create_absence_request(
    absence_in: absence_schema.AbsenceCreate,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Files an absence request for the logged-in employee. """
    return AbsenceService(db).create(principal, absence_in)

@router.get("/me", response_model=List[absence_schema.AbsenceRequest])
def read_my_absences(
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    return AbsenceService(db).list_mine(principal)

@router.get("", response_model=List[absence_schema.AbsenceRequest])
def read_all_absences(
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Every absence request in the company. Managers only. """
    return AbsenceService(db).list_all(principal)

@router.patch("/{absence_id}", response_model=absence_schema.AbsenceRequest)
@router.put("/{absence_id}/status", response_model=absence_schema.AbsenceRequest)
def update_absence_status(
    absence_id: str,
    update: absence_schema.AbsenceStatusUpdate,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Approves or rejects a pending request. A decided request cannot change again. """
    return AbsenceService(db).update_status(principal, absence_id, update.status)
