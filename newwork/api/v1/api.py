# newwork-server/newwork/api/v1/api.py
from fastapi import APIRouter
from newwork.api.v1.endpoints import auth, users, employees, feedback, absences, data_items

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
api_router.include_router(absences.router, prefix="/absences", tags=["Absences"])
api_router.include_router(data_items.router, prefix="/data-items", tags=["Data Items"])
