"""
Optimistic reconciliation between the local idea list and the server.

Every mutation is applied to the store before the request goes out. When the
server confirms, its payload (if it sent one) replaces the local copy of the
idea; when it refuses, the store goes back to the snapshot taken before the
mutation and the error is re-raised for the UI to show. A 2xx answer that
does not parse counts as a refusal.

Two mutations in flight at once are not merged: whichever settles last wins
for the ideas it touches.
"""

from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar
import logging

from pydantic import ValidationError

from ideaboard.client.api import ApiError, IdeaBoardClient
from ideaboard.client.store import (
    CommentAdded,
    CommentRemoved,
    IdeaDeleted,
    IdeaStore,
    PendingMutation,
    PROVISIONAL_VOTE_ID,
    StatusChanged,
    VoteToggled,
)
from ideaboard.models.ideas import IdeaStatus
from ideaboard.schemas.idea import CommentRead, IdeaRead, VoteRead, VoteToggleResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OptimisticReconciler:
    def __init__(self, client: IdeaBoardClient, store: Optional[IdeaStore] = None, user_id: Optional[int] = None):
        self.client = client
        self.store = store or IdeaStore()
        self._user_id = user_id

    @property
    def user_id(self) -> int:
        if self._user_id is None:
            self._user_id = self.client.me().id
        return self._user_id

    def refresh(self) -> None:
        """Replace local state with the server's list."""
        self.store.replace_all(self.client.list_ideas())

    def _send(self, pending: PendingMutation, call: Callable[[], T],
              rollback: Optional[Callable[[PendingMutation], None]] = None) -> T:
        try:
            return call()
        except (ApiError, ValidationError) as e:
            if isinstance(e, ApiError):
                reason = f"{e.status_code} {e.error_code}"
            else:
                reason = "unreadable response"
            logger.warning(f"{pending.action.kind} on idea {pending.action.idea_id} failed ({reason}); reverting")
            if rollback is not None:
                rollback(pending)
            else:
                self.store.restore(pending.before)
            raise

    def toggle_vote(self, idea_id: int) -> VoteToggleResponse:
        user_id = self.user_id
        pending = self.store.dispatch(VoteToggled(idea_id=idea_id, user_id=user_id))
        result = self._send(pending, lambda: self.client.toggle_vote(idea_id))
        self._settle_vote(idea_id, user_id, result)
        return result

    def _settle_vote(self, idea_id: int, user_id: int, result: VoteToggleResponse) -> None:
        # The server's answer decides the caller's membership
        idea = self.store.get(idea_id)
        if idea is None:
            return
        others = [vote for vote in idea.votes if vote.user_id != user_id]
        if result.voted:
            mine = next((vote for vote in idea.votes if vote.user_id == user_id), None)
            if mine is None:
                mine = VoteRead(id=result.vote_id or PROVISIONAL_VOTE_ID, user_id=user_id, idea_id=idea_id, created_at=datetime.now(timezone.utc))
            elif result.vote_id is not None:
                mine = mine.model_copy(update={"id": result.vote_id})
            others.append(mine)
        self.store.replace_idea(idea.model_copy(update={"votes": others}))

    def change_status(self, idea_id: int, status: IdeaStatus) -> IdeaRead:
        """Move a card to another column; on failure only that card moves back."""
        pending = self.store.dispatch(StatusChanged(idea_id=idea_id, status=IdeaStatus(status)))
        updated = self._send(
            pending,
            lambda: self.client.set_status(idea_id, status),
            rollback=lambda p: self.store.restore_idea(p.before, idea_id)
        )
        self.store.replace_idea(updated)
        return updated

    def delete_idea(self, idea_id: int) -> None:
        pending = self.store.dispatch(IdeaDeleted(idea_id=idea_id))
        self._send(pending, lambda: self.client.delete_idea(idea_id))
        logger.info(f"Idea {idea_id} deleted")

    def add_comment(self, idea_id: int, content: str) -> CommentRead:
        pending = self.store.dispatch(CommentAdded(idea_id=idea_id))
        return self._send(pending, lambda: self.client.add_comment(idea_id, content))

    def delete_comment(self, idea_id: int, comment_id: int) -> None:
        pending = self.store.dispatch(CommentRemoved(idea_id=idea_id))
        self._send(pending, lambda: self.client.delete_comment(comment_id))
        logger.info(f"Comment {comment_id} deleted from idea {idea_id}")

    def submit_idea(self, title: str, description: str, category_id: int) -> IdeaRead:
        """Not optimistic: the idea has no id until the server assigns one."""
        created = self.client.create_idea(title, description, category_id)
        self.store.prepend(created)
        return created
