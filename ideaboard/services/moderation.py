"""
Status transition engine.

pending, approved and rejected are all reachable from one another; only the
acting user's permission decides whether a transition happens.
"""

import logging

from sqlalchemy.orm import Session

from ideaboard.core.constants import ErrorMessages
from ideaboard.core.policy import Action, authorize
from ideaboard.models.ideas import Idea, IdeaStatus
from ideaboard.models.user import User
from ideaboard.services.ideas import get_idea

logger = logging.getLogger(__name__)


def set_status(db: Session, idea_id: int, new_status: IdeaStatus, acting_user: User) -> Idea:
    new_status = IdeaStatus(new_status)
    idea = get_idea(db, idea_id)

    authorize(
        acting_user,
        idea,
        Action.CHANGE_STATUS,
        ErrorMessages.NOT_AUTHORIZED_STATUS,
        idea_id=idea_id
    )

    if idea.status == new_status:
        logger.info(f"Idea {idea_id} already {new_status.value}; nothing to change")
        return idea

    previous = idea.status
    idea.status = new_status
    db.commit()

    logger.info(f"Idea {idea_id} moved from {previous.value} to {new_status.value} by user {acting_user.id}")
    return get_idea(db, idea_id)
