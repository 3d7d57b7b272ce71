"""
Vote ledger.

A vote is nothing but the existence of a (user, idea) row, so toggling is the
only write. The flip is a conditional DELETE followed, when nothing was
deleted, by an INSERT guarded by the unique constraint. There is no separate
read step for two racing requests to interleave with.

Concurrent toggles by the same user do not resolve symmetrically. From "not
voted", both requests try to insert; the loser's insert is absorbed and both
report the surviving vote, so the pair nets one change instead of zero. From
"voted", a row-locking store lets one DELETE remove the row while the other
matches nothing and inserts it again, so the pair nets zero changes. Either
way the ledger keeps at most one vote per user and idea, and the response
always describes the row that is actually stored.

An insert rejected while no matching vote exists is not a lost race. The idea
is looked up again so a concurrent delete surfaces as NotFoundError.
"""

from typing import NamedTuple, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ideaboard.core.constants import ErrorMessages
from ideaboard.core.exception import ConflictError
from ideaboard.models.ideas import Vote
from ideaboard.services.ideas import get_idea

logger = logging.getLogger(__name__)


class VoteToggleResult(NamedTuple):
    voted: bool
    vote_id: Optional[int] = None


def _cast(db: Session, idea_id: int, user_id: int) -> Vote:
    try:
        with db.begin_nested():  # SAVEPOINT so a lost race only undoes the insert
            vote = Vote(user_id=user_id, idea_id=idea_id)
            db.add(vote)
            db.flush()  # Force the unique constraint check
        return vote
    except IntegrityError as e:
        raise ConflictError(ErrorMessages.VOTE_CONFLICT, idea_id=idea_id, user_id=user_id) from e


def toggle_vote(db: Session, idea_id: int, user_id: int) -> VoteToggleResult:
    """Retract the caller's vote if it exists, cast it otherwise."""
    get_idea(db, idea_id)

    retracted = (
        db.query(Vote)
        .filter(Vote.idea_id == idea_id, Vote.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if retracted:
        db.commit()
        logger.info(f"Vote retracted: Idea {idea_id}, User {user_id}")
        return VoteToggleResult(voted=False)

    try:
        vote = _cast(db, idea_id, user_id)
    except ConflictError:
        # A concurrent toggle inserted the same row first; its vote is our vote
        existing = (
            db.query(Vote)
            .filter(Vote.idea_id == idea_id, Vote.user_id == user_id)
            .first()
        )
        if existing is None:
            # Nothing won the race, so the insert failed for another reason
            db.rollback()
            get_idea(db, idea_id)
            raise
        vote_id = existing.id
        db.commit()
        logger.info(f"Vote race lost on idea {idea_id} for user {user_id}; keeping existing vote")
        return VoteToggleResult(voted=True, vote_id=vote_id)

    vote_id = vote.id
    db.commit()
    logger.info(f"Vote cast: ID {vote_id}, Idea {idea_id}, User {user_id}")
    return VoteToggleResult(voted=True, vote_id=vote_id)
