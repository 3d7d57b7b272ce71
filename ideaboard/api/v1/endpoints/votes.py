from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ideaboard.db.database import get_db
from ideaboard.models.user import User
from ideaboard.schemas.idea import VoteToggleRequest, VoteToggleResponse
from ideaboard.api.v1.endpoints.dependencies import get_current_user
from ideaboard.api.v1.utils.errors import database_failure
from ideaboard.core.exception import IdeaBoardError
from ideaboard.services.votes import toggle_vote
from ideaboard.api.v1.responses import get_vote_toggle_responses

logger = logging.getLogger(__name__)

router = APIRouter(tags=["votes"])


@router.post(
    "/vote",
    response_model=VoteToggleResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Toggle the caller's vote on an idea",
    description="Casts a vote if the caller has none on the idea, retracts it otherwise.",
    responses=get_vote_toggle_responses()
)
def vote(
    payload: VoteToggleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        logger.info(f"Vote toggle on idea {payload.idea_id} by user {current_user.id}")
        result = toggle_vote(db, payload.idea_id, current_user.id)
        return VoteToggleResponse(voted=result.voted, vote_id=result.vote_id)
    except IdeaBoardError:
        raise
    except SQLAlchemyError as e:
        raise database_failure(db, f"toggle vote on idea {payload.idea_id}", e, idea_id=payload.idea_id)
