"""
Idea lookup, listing and serialization shared by the engagement services.
"""

from enum import Enum
from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from ideaboard.core.constants import ErrorMessages, ErrorCodes
from ideaboard.core.exception import NotFoundError
from ideaboard.models.ideas import Idea, IdeaStatus, Category, Vote
from ideaboard.models.user import User
from ideaboard.schemas.idea import IdeaCreate, IdeaRead, AuthorRead, CategoryRead, VoteRead

logger = logging.getLogger(__name__)


class IdeaSort(str, Enum):
    NEWEST = "newest"
    MOST_VOTES = "most_votes"


def _idea_query(db: Session):
    return db.query(Idea).options(
        joinedload(Idea.author),
        joinedload(Idea.category),
        selectinload(Idea.votes)
    )


def get_idea(db: Session, idea_id: int) -> Idea:
    """Load an idea with its aggregates or raise NotFoundError."""
    idea = _idea_query(db).filter(Idea.id == idea_id).first()
    if idea is None:
        logger.warning(f"Idea not found: ID {idea_id}")
        raise NotFoundError(ErrorMessages.IDEA_NOT_FOUND, error_code=ErrorCodes.IDEA_NOT_FOUND, idea_id=idea_id)
    return idea


def to_idea_read(idea: Idea) -> IdeaRead:
    return IdeaRead(
        id=idea.id,
        title=idea.title,
        description=idea.description,
        status=idea.status,
        created_at=idea.created_at,
        updated_at=idea.updated_at,
        author=AuthorRead.model_validate(idea.author),
        category=CategoryRead.model_validate(idea.category),
        votes=[VoteRead.model_validate(vote) for vote in idea.votes],
        comments=idea.comment_count
    )


def list_ideas(
    db: Session,
    category_id: Optional[int] = None,
    status: Optional[IdeaStatus] = None,
    search: Optional[str] = None,
    sort: IdeaSort = IdeaSort.NEWEST
) -> List[Idea]:
    query = _idea_query(db)

    if category_id is not None:
        query = query.filter(Idea.category_id == category_id)
    if status is not None:
        query = query.filter(Idea.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(Idea.title.ilike(pattern) | Idea.description.ilike(pattern))

    if sort == IdeaSort.MOST_VOTES:
        vote_totals = (
            db.query(Vote.idea_id, func.count(Vote.id).label("total_votes"))
            .group_by(Vote.idea_id)
            .subquery()
        )
        query = (
            query.outerjoin(vote_totals, Idea.id == vote_totals.c.idea_id)
            .order_by(func.coalesce(vote_totals.c.total_votes, 0).desc(), Idea.id.desc())
        )
    else:
        query = query.order_by(Idea.created_at.desc(), Idea.id.desc())

    return query.all()


def create_idea(db: Session, payload: IdeaCreate, author: User) -> Idea:
    """Submit a new idea; every idea starts out pending."""
    category = db.query(Category).filter(Category.id == payload.category_id).first()
    if category is None:
        logger.warning(f"User {author.id} submitted an idea for missing category {payload.category_id}")
        raise NotFoundError(
            ErrorMessages.CATEGORY_NOT_FOUND,
            error_code=ErrorCodes.CATEGORY_NOT_FOUND,
            category_id=payload.category_id
        )

    idea = Idea(
        title=payload.title,
        description=payload.description,
        category_id=category.id,
        author_id=author.id,
        status=IdeaStatus.PENDING
    )
    db.add(idea)
    db.commit()

    logger.info(f"Idea created: ID {idea.id}, Title: '{idea.title}', Author: {author.id}")
    return get_idea(db, idea.id)
