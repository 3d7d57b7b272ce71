"""
Versioned in-memory store of the ideas a client displays.

State is an immutable tuple of IdeaRead models and only changes through
`IdeaStore.dispatch`, which runs the pure `reduce` over one of the typed
actions below. Each dispatch returns a PendingMutation holding the snapshot
taken just before it, which is what a failed request rolls back to.
"""

from datetime import datetime, timezone
from typing import Iterable, Literal, Optional, Tuple, Union
import logging

from pydantic import BaseModel, ConfigDict, Field

from ideaboard.models.ideas import IdeaStatus
from ideaboard.schemas.idea import IdeaRead, VoteRead

logger = logging.getLogger(__name__)

Ideas = Tuple[IdeaRead, ...]

# Placeholder id of a vote the server has not confirmed yet
PROVISIONAL_VOTE_ID = 0


class VoteToggled(BaseModel):
    kind: Literal["vote_toggled"] = "vote_toggled"
    idea_id: int
    user_id: int

    model_config = ConfigDict(frozen=True)


class StatusChanged(BaseModel):
    kind: Literal["status_changed"] = "status_changed"
    idea_id: int
    status: IdeaStatus

    model_config = ConfigDict(frozen=True)


class IdeaDeleted(BaseModel):
    kind: Literal["idea_deleted"] = "idea_deleted"
    idea_id: int

    model_config = ConfigDict(frozen=True)


class CommentAdded(BaseModel):
    kind: Literal["comment_added"] = "comment_added"
    idea_id: int

    model_config = ConfigDict(frozen=True)


class CommentRemoved(BaseModel):
    kind: Literal["comment_removed"] = "comment_removed"
    idea_id: int

    model_config = ConfigDict(frozen=True)


IdeaAction = Union[VoteToggled, StatusChanged, IdeaDeleted, CommentAdded, CommentRemoved]


class Snapshot(BaseModel):
    version: int
    ideas: Ideas

    model_config = ConfigDict(frozen=True)

    def find(self, idea_id: int) -> Optional[IdeaRead]:
        return next((idea for idea in self.ideas if idea.id == idea_id), None)


class PendingMutation(BaseModel):
    """An action applied locally and awaiting the server's verdict."""
    action: IdeaAction = Field(..., discriminator="kind")
    before: Snapshot

    model_config = ConfigDict(frozen=True)


def _toggle_vote(idea: IdeaRead, user_id: int) -> IdeaRead:
    if idea.has_voted(user_id):
        votes = [vote for vote in idea.votes if vote.user_id != user_id]
    else:
        votes = idea.votes + [
            VoteRead(
                id=PROVISIONAL_VOTE_ID,
                user_id=user_id,
                idea_id=idea.id,
                created_at=datetime.now(timezone.utc)
            )
        ]
    return idea.model_copy(update={"votes": votes})


def reduce(ideas: Ideas, action: IdeaAction) -> Ideas:
    """Return the list that results from applying `action`; `ideas` is left untouched."""
    if isinstance(action, IdeaDeleted):
        return tuple(idea for idea in ideas if idea.id != action.idea_id)

    def apply(idea: IdeaRead) -> IdeaRead:
        if idea.id != action.idea_id:
            return idea
        if isinstance(action, VoteToggled):
            return _toggle_vote(idea, action.user_id)
        if isinstance(action, StatusChanged):
            return idea.model_copy(update={"status": action.status})
        if isinstance(action, CommentAdded):
            return idea.model_copy(update={"comments": idea.comments + 1})
        if isinstance(action, CommentRemoved):
            return idea.model_copy(update={"comments": max(idea.comments - 1, 0)})
        raise TypeError(f"Unknown action: {action!r}")

    return tuple(apply(idea) for idea in ideas)


class IdeaStore:
    def __init__(self, ideas: Iterable[IdeaRead] = ()):
        self._ideas: Ideas = tuple(ideas)
        self._version = 0

    @property
    def ideas(self) -> Ideas:
        return self._ideas

    @property
    def version(self) -> int:
        return self._version

    def get(self, idea_id: int) -> Optional[IdeaRead]:
        return next((idea for idea in self._ideas if idea.id == idea_id), None)

    def snapshot(self) -> Snapshot:
        return Snapshot(version=self._version, ideas=self._ideas)

    def _commit(self, ideas: Ideas) -> None:
        self._ideas = ideas
        self._version += 1

    def dispatch(self, action: IdeaAction) -> PendingMutation:
        pending = PendingMutation(action=action, before=self.snapshot())
        self._commit(reduce(self._ideas, action))
        logger.debug(f"Applied {action.kind} to idea {action.idea_id} (version {self._version})")
        return pending

    def replace_all(self, ideas: Iterable[IdeaRead]) -> None:
        """Adopt a fresh server listing wholesale."""
        self._commit(tuple(ideas))

    def replace_idea(self, idea: IdeaRead) -> None:
        """Swap in the server's copy of one idea; absent ideas are left absent."""
        self._commit(tuple(idea if current.id == idea.id else current for current in self._ideas))

    def prepend(self, idea: IdeaRead) -> None:
        self._commit((idea,) + tuple(current for current in self._ideas if current.id != idea.id))

    def restore(self, snapshot: Snapshot) -> None:
        """Put the whole list back the way it was when `snapshot` was taken."""
        logger.warning(f"Reverting ideas to version {snapshot.version}")
        self._commit(snapshot.ideas)

    def restore_idea(self, snapshot: Snapshot, idea_id: int) -> None:
        """Revert a single idea to its state in `snapshot`, leaving the others alone."""
        previous = snapshot.find(idea_id)
        if previous is None:
            return
        logger.warning(f"Reverting idea {idea_id} to version {snapshot.version}")
        self.replace_idea(previous)
