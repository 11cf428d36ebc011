# newwork-server/newwork/api/v1/endpoints/feedback.py
from typing import List

from fastapi import APIRouter, Depends, Request, status

from newwork.core import security
from newwork.core.policy import Principal
from newwork.db import session
from newwork.db.store import Database
from newwork.schemas import feedback as feedback_schema
from newwork.services.feedback import FeedbackService
from newwork.services.polishing import FeedbackPolisher

router = APIRouter()

def get_polisher(request: Request) -> FeedbackPolisher:
    return request.app.state.polisher

@router.post("", response_model=feedback_schema.Feedback, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    feedback_in: feedback_schema.FeedbackCreate,
    db: Database = Depends(session.get_db),
    polisher: FeedbackPolisher = Depends(get_polisher),
    principal: Principal = Depends(security.get_current_principal)
):
    """
    Leaves feedback about a colleague, optionally polished by the text model.
    """
    return await FeedbackService(db, polisher).create(principal, feedback_in)

@router.get("/{target_id}", response_model=List[feedback_schema.Feedback])
def read_feedback_for(
    target_id: str,
    db: Database = Depends(session.get_db),
    polisher: FeedbackPolisher = Depends(get_polisher),
    principal: Principal = Depends(security.get_current_principal)
):
    return FeedbackService(db, polisher).list_for_target(principal, target_id)
