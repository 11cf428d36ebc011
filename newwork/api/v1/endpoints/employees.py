# newwork-server/newwork/api/v1/endpoints/employees.py
from fastapi import APIRouter, Depends

from newwork.core import security
from newwork.core.policy import Principal
from newwork.db import session
from newwork.db.store import Database
from newwork.schemas import employee as employee_schema
from newwork.services.employees import EmployeeService

router = APIRouter()

# Views differ per caller (full or public), so the routes return the typed
# view itself instead of coercing it through a single response_model.

@router.get("", response_model=None)
def list_employees(
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ The employee directory as the caller is allowed to see it. """
    return EmployeeService(db).list(principal)

@router.get("/{employee_id}", response_model=None)
def read_employee(
    employee_id: str,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    return EmployeeService(db).get(principal, employee_id)

@router.put("/{employee_id}", response_model=employee_schema.EmployeeFull)
def update_employee(
    employee_id: str,
    updates: employee_schema.EmployeeUpdate,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Updates a profile. Managers may edit anyone, employees only themselves. """
    return EmployeeService(db).update(principal, employee_id, updates)
