# newwork-server/newwork/services/feedback.py
import logging
from typing import List

from fastapi.concurrency import run_in_threadpool

from newwork.core.exceptions import InvalidInput
from newwork.core.policy import Operation, Principal, Resource
from newwork.core.redaction import to_view
from newwork.db.models import Feedback
from newwork.db.store import Database
from newwork.schemas import feedback as schemas
from newwork.services.base import authorize
from newwork.services.polishing import FeedbackPolisher

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, db: Database, polisher: FeedbackPolisher):
        self.db = db
        self.polisher = polisher

    async def create(self, principal: Principal, feedback_in: schemas.FeedbackCreate) -> schemas.Feedback:
        """
        Records feedback from the principal about ``target_id``. Polishing, when
        asked for, runs before the feedback log is locked for writing.
        """
        authorize(principal, Operation.CREATE, Resource.FEEDBACK, None)
        # Store locks block their thread, so they are taken off the event loop
        if await run_in_threadpool(self.db.users.get, feedback_in.target_id) is None:
            raise InvalidInput(f"User '{feedback_in.target_id}' does not exist")

        polished = None
        if feedback_in.polish:
            polished = await self.polisher.polish(feedback_in.content)

        feedback = await run_in_threadpool(self.db.feedbacks.append, Feedback(
            target_id=feedback_in.target_id,
            from_user_id=principal.id,
            content=feedback_in.content,
            polished_content=polished,
        ))
        logger.info("User %s left feedback %s for %s", principal.id, feedback.id, feedback.target_id)
        return to_view(feedback, schemas.Feedback)

    def list_for_target(self, principal: Principal, target_id: str) -> List[schemas.Feedback]:
        authorize(principal, Operation.READ, Resource.FEEDBACK, target_id)
        entries = self.db.feedbacks.filter(lambda f: f.target_id == target_id)
        return [to_view(f, schemas.Feedback) for f in entries]
