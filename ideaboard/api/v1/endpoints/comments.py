from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime, timezone
import logging

from ideaboard.db.database import get_db
from ideaboard.models.user import User
from ideaboard.schemas.idea import CommentDeleteResponse
from ideaboard.api.v1.endpoints.dependencies import get_current_user
from ideaboard.services.deletion import delete_comment
from ideaboard.api.v1.responses import get_comment_delete_responses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete(
    "/{comment_id}",
    response_model=CommentDeleteResponse,
    summary="Delete a comment",
    description="Remove a single comment. Allowed for its author and administrators. The idea and its votes are untouched.",
    responses=get_comment_delete_responses()
)
def remove_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    logger.info(f"User {current_user.id} attempting to delete comment ID: {comment_id}")
    delete_comment(db, comment_id, current_user)
    return {
        "message": "Comment deleted successfully",
        "comment_id": comment_id,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
