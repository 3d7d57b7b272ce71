"""
Comment aggregator.

Owns comment rows and the denormalized `Idea.comment_count`. Every change to
the rows adjusts the counter in the same transaction with a SQL-side
increment, so the two cannot drift apart.
"""

from typing import List
import logging

from sqlalchemy.orm import Session, joinedload

from ideaboard.core.constants import ErrorMessages
from ideaboard.core.exception import InvalidInputError
from ideaboard.models.ideas import Comment, Idea
from ideaboard.models.user import User
from ideaboard.services.ideas import get_idea

logger = logging.getLogger(__name__)


def adjust_comment_count(db: Session, idea_id: int, delta: int) -> None:
    db.query(Idea).filter(Idea.id == idea_id).update(
        {Idea.comment_count: Idea.comment_count + delta},
        synchronize_session=False
    )


def add_comment(db: Session, idea_id: int, user: User, content: str) -> Comment:
    text = (content or "").strip()
    if not text:
        logger.warning(f"User {user.id} submitted an empty comment on idea {idea_id}")
        raise InvalidInputError(ErrorMessages.EMPTY_COMMENT, idea_id=idea_id)

    get_idea(db, idea_id)

    comment = Comment(idea_id=idea_id, user_id=user.id, content=text)
    db.add(comment)
    adjust_comment_count(db, idea_id, 1)
    db.commit()
    db.refresh(comment)

    logger.info(f"Comment added: ID {comment.id}, Idea {idea_id}, User {user.id}")
    return comment


def list_comments(db: Session, idea_id: int) -> List[Comment]:
    """Comments of an idea, newest first."""
    get_idea(db, idea_id)
    return (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.idea_id == idea_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


def count_live_comments(db: Session, idea_id: int) -> int:
    return db.query(Comment).filter(Comment.idea_id == idea_id).count()
