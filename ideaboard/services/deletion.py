"""
Cascading deletion coordinator.

An idea owns its votes and comments. Removing it deletes votes, then
comments, then the idea row inside a single unit of work. Either all three
steps commit or none of them do, so no vote or comment can outlive its idea.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ideaboard.core.constants import ErrorMessages, ErrorCodes
from ideaboard.core.exception import NotFoundError, TransactionFailureError
from ideaboard.core.policy import Action, authorize
from ideaboard.db.database import unit_of_work
from ideaboard.models.ideas import Comment, Idea, Vote
from ideaboard.models.user import User
from ideaboard.schemas.idea import IdeaRead
from ideaboard.services.comments import adjust_comment_count
from ideaboard.services.ideas import get_idea, to_idea_read

logger = logging.getLogger(__name__)


def delete_idea(db: Session, idea_id: int, acting_user: User) -> IdeaRead:
    """Delete an idea with all of its votes and comments; returns the removed record."""
    idea = get_idea(db, idea_id)

    authorize(
        acting_user,
        idea,
        Action.DELETE_IDEA,
        ErrorMessages.NOT_AUTHORIZED_DELETE_IDEA,
        idea_id=idea_id,
        author_id=idea.author_id
    )

    # Snapshot before the rows disappear, for the audit trail
    deleted = to_idea_read(idea)

    try:
        with unit_of_work(db):
            votes_removed = (
                db.query(Vote).filter(Vote.idea_id == idea_id).delete(synchronize_session=False)
            )
            comments_removed = (
                db.query(Comment).filter(Comment.idea_id == idea_id).delete(synchronize_session=False)
            )
            db.query(Idea).filter(Idea.id == idea_id).delete(synchronize_session=False)
    except SQLAlchemyError as e:
        logger.error(f"Cascade delete of idea {idea_id} failed and was rolled back: {e}")
        raise TransactionFailureError(idea_id=idea_id) from e

    logger.info(
        f"Idea deleted: ID {idea_id}, Title: '{deleted.title}', "
        f"Votes: {votes_removed}, Comments: {comments_removed}, By: {acting_user.id}"
    )
    return deleted


def delete_comment(db: Session, comment_id: int, acting_user: User) -> None:
    """Delete one comment; the idea's votes are never touched."""
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if comment is None:
        logger.warning(f"Comment not found: ID {comment_id}")
        raise NotFoundError(
            ErrorMessages.COMMENT_NOT_FOUND,
            error_code=ErrorCodes.COMMENT_NOT_FOUND,
            comment_id=comment_id
        )

    authorize(
        acting_user,
        comment,
        Action.DELETE_COMMENT,
        ErrorMessages.NOT_AUTHORIZED_DELETE_COMMENT,
        comment_id=comment_id
    )

    idea_id = comment.idea_id
    try:
        with unit_of_work(db):
            db.query(Comment).filter(Comment.id == comment_id).delete(synchronize_session=False)
            adjust_comment_count(db, idea_id, -1)
    except SQLAlchemyError as e:
        logger.error(f"Deleting comment {comment_id} failed and was rolled back: {e}")
        raise TransactionFailureError(comment_id=comment_id) from e

    logger.info(f"Comment deleted: ID {comment_id}, Idea {idea_id}, By: {acting_user.id}")
