from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
from typing import List, Optional
import logging

from ideaboard.db.database import get_db
from ideaboard.models.ideas import IdeaStatus
from ideaboard.models.user import User
from ideaboard.schemas.idea import (
    IdeaCreate,
    IdeaRead,
    IdeaStatusUpdate,
    IdeaDeleteResponse,
    CommentCreate,
    CommentRead
)
from ideaboard.api.v1.endpoints.dependencies import get_current_user
from ideaboard.api.v1.utils.errors import database_failure
from ideaboard.core.exception import IdeaBoardError
from ideaboard.services import comments as comment_service
from ideaboard.services import deletion, moderation
from ideaboard.services.ideas import IdeaSort, create_idea, get_idea, list_ideas, to_idea_read
from ideaboard.api.v1.responses import (
    get_idea_list_responses,
    get_idea_create_responses,
    get_single_idea_responses,
    get_idea_status_responses,
    get_idea_delete_responses,
    get_comment_create_responses,
    get_comment_list_responses
)

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get(
    "",
    response_model=List[IdeaRead],
    summary="List ideas",
    description="All ideas with their author, category, votes and comment count.",
    responses=get_idea_list_responses()
)
def read_ideas(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None, description="Only ideas in this category"),
    idea_status: Optional[IdeaStatus] = Query(None, alias="status", description="Only ideas in this moderation state"),
    search: Optional[str] = Query(None, description="Search in titles and descriptions"),
    sort: IdeaSort = Query(IdeaSort.NEWEST, description="newest or most_votes")
):
    """
    List ideas for the board.

    - **category_id**: filter by category
    - **status**: pending, approved or rejected
    - **search**: case-insensitive text search
    - **sort**: newest (default) or most_votes
    """
    try:
        ideas = list_ideas(db, category_id=category_id, status=idea_status, search=search, sort=sort)
        return [to_idea_read(idea) for idea in ideas]
    except SQLAlchemyError as e:
        raise database_failure(db, "list ideas", e)


@router.post(
    "",
    response_model=IdeaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a new idea",
    responses=get_idea_create_responses()
)
def submit_idea(
    idea: IdeaCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Submit an idea. It starts out pending until an administrator moderates it."""
    try:
        logger.info(f"User {current_user.id} submitting idea: '{idea.title}'")
        return to_idea_read(create_idea(db, idea, current_user))
    except IdeaBoardError:
        raise
    except SQLAlchemyError as e:
        raise database_failure(db, "create an idea", e)


@router.get(
    "/{idea_id}",
    response_model=IdeaRead,
    summary="Get a specific idea by ID",
    responses=get_single_idea_responses()
)
def read_idea(idea_id: int, db: Session = Depends(get_db)):
    return to_idea_read(get_idea(db, idea_id))


@router.patch(
    "/{idea_id}",
    response_model=IdeaRead,
    summary="Change the moderation status of an idea",
    description="Administrators move ideas between pending, approved and rejected. Re-applying the current status succeeds without changes.",
    responses=get_idea_status_responses()
)
def update_idea_status(
    idea_id: int,
    update: IdeaStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        logger.info(f"User {current_user.id} setting idea {idea_id} to {update.status.value}")
        idea = moderation.set_status(db, idea_id, update.status, current_user)
        return to_idea_read(idea)
    except IdeaBoardError:
        raise
    except SQLAlchemyError as e:
        raise database_failure(db, f"update status of idea {idea_id}", e, idea_id=idea_id)


@router.delete(
    "/{idea_id}",
    response_model=IdeaDeleteResponse,
    response_model_exclude_none=True,
    summary="Delete an idea",
    description="Delete an idea together with all of its votes and comments. Allowed for the author and administrators.",
    responses=get_idea_delete_responses()
)
def delete_idea(
    idea_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete an idea permanently.

    Votes, comments and the idea itself are removed in one transaction; if any
    step fails nothing is deleted and the request answers 500.
    """
    logger.info(f"User {current_user.id} attempting to delete idea ID: {idea_id}")
    # Captured up front; the session is rolled back if the cascade fails
    is_admin = current_user.is_admin
    actor_id = current_user.id
    deleted = deletion.delete_idea(db, idea_id, current_user)

    response = {
        "message": "Idea and associated votes and comments deleted successfully",
        "idea_id": idea_id,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
    # Moderator deletions of someone else's idea carry the removed record
    if is_admin and deleted.author.id != actor_id:
        response["deleted_idea"] = deleted
    return response


@router.get(
    "/{idea_id}/comments",
    response_model=List[CommentRead],
    summary="List the comments of an idea",
    responses=get_comment_list_responses()
)
def read_comments(idea_id: int, db: Session = Depends(get_db)):
    return comment_service.list_comments(db, idea_id)


@router.post(
    "/{idea_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on an idea",
    responses=get_comment_create_responses()
)
def add_comment(
    idea_id: int,
    comment: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Add a comment; the idea's comment count goes up by one in the same transaction."""
    try:
        logger.info(f"User {current_user.id} commenting on idea {idea_id}")
        return comment_service.add_comment(db, idea_id, current_user, comment.content)
    except IdeaBoardError:
        raise
    except SQLAlchemyError as e:
        raise database_failure(db, f"comment on idea {idea_id}", e, idea_id=idea_id)
