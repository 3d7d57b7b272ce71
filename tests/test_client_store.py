"""Tests for the client-side idea store and its reducer"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from ideaboard.client.store import (
    CommentAdded,
    CommentRemoved,
    IdeaDeleted,
    IdeaStore,
    PendingMutation,
    PROVISIONAL_VOTE_ID,
    StatusChanged,
    VoteToggled,
    reduce,
)
from ideaboard.models.ideas import IdeaStatus
from tests.factories import make_idea


class TestReduce:

    def test_vote_added_for_new_voter(self):
        ideas = (make_idea(1, votes=[2]),)

        result = reduce(ideas, VoteToggled(idea_id=1, user_id=7))

        assert result[0].vote_count == 2
        assert result[0].has_voted(7)
        mine = [vote for vote in result[0].votes if vote.user_id == 7][0]
        assert mine.id == PROVISIONAL_VOTE_ID
        assert isinstance(mine.created_at, datetime)

    def test_vote_removed_for_existing_voter(self):
        ideas = (make_idea(1, votes=[2, 7]),)

        result = reduce(ideas, VoteToggled(idea_id=1, user_id=7))

        assert [vote.user_id for vote in result[0].votes] == [2]

    def test_input_is_not_mutated(self):
        ideas = (make_idea(1, votes=[2]),)

        reduce(ideas, VoteToggled(idea_id=1, user_id=7))

        assert ideas[0].vote_count == 1

    def test_status_change(self):
        result = reduce((make_idea(1), make_idea(2)), StatusChanged(idea_id=2, status=IdeaStatus.APPROVED))

        assert result[0].status == IdeaStatus.PENDING
        assert result[1].status == IdeaStatus.APPROVED

    def test_delete(self):
        result = reduce((make_idea(1), make_idea(2)), IdeaDeleted(idea_id=1))
        assert [idea.id for idea in result] == [2]

    def test_comment_added(self):
        result = reduce((make_idea(1, comments=3),), CommentAdded(idea_id=1))
        assert result[0].comments == 4

    def test_comment_removed(self):
        result = reduce((make_idea(1, comments=3),), CommentRemoved(idea_id=1))
        assert result[0].comments == 2

    def test_comment_count_never_goes_negative(self):
        result = reduce((make_idea(1),), CommentRemoved(idea_id=1))
        assert result[0].comments == 0

    def test_unknown_idea_leaves_list_alone(self):
        ideas = (make_idea(1),)
        assert reduce(ideas, VoteToggled(idea_id=99, user_id=7)) == ideas


class TestActions:

    def test_actions_are_frozen(self):
        action = VoteToggled(idea_id=1, user_id=2)
        with pytest.raises(ValidationError):
            action.idea_id = 3

    def test_status_must_be_known(self):
        with pytest.raises(ValidationError):
            StatusChanged(idea_id=1, status="archived")

    def test_pending_mutation_picks_action_by_kind(self):
        pending = PendingMutation.model_validate({
            "action": {"kind": "idea_deleted", "idea_id": 4},
            "before": {"version": 0, "ideas": []},
        })
        assert isinstance(pending.action, IdeaDeleted)


class TestIdeaStore:

    def test_dispatch_bumps_version_and_keeps_snapshot(self):
        store = IdeaStore([make_idea(1), make_idea(2)])

        pending = store.dispatch(IdeaDeleted(idea_id=1))

        assert store.version == 1
        assert [idea.id for idea in store.ideas] == [2]
        assert pending.before.version == 0
        assert [idea.id for idea in pending.before.ideas] == [1, 2]

    def test_restore_puts_everything_back(self):
        store = IdeaStore([make_idea(1), make_idea(2)])
        pending = store.dispatch(IdeaDeleted(idea_id=1))

        store.restore(pending.before)

        assert [idea.id for idea in store.ideas] == [1, 2]
        assert store.version == 2

    def test_restore_idea_reverts_only_that_idea(self):
        store = IdeaStore([make_idea(1), make_idea(2)])
        pending = store.dispatch(StatusChanged(idea_id=1, status=IdeaStatus.REJECTED))
        store.dispatch(VoteToggled(idea_id=2, user_id=5))

        store.restore_idea(pending.before, 1)

        assert store.get(1).status == IdeaStatus.PENDING
        assert store.get(2).has_voted(5)

    def test_restore_idea_ignores_ideas_missing_from_snapshot(self):
        store = IdeaStore()
        snapshot = store.snapshot()
        store.prepend(make_idea(3))

        store.restore_idea(snapshot, 3)

        assert store.get(3) is not None

    def test_replace_idea_does_not_resurrect(self):
        store = IdeaStore([make_idea(1)])
        store.replace_idea(make_idea(2))
        assert [idea.id for idea in store.ideas] == [1]

    def test_prepend_moves_existing_idea_to_top(self):
        store = IdeaStore([make_idea(1), make_idea(2)])
        store.prepend(make_idea(2, status="approved"))

        assert [idea.id for idea in store.ideas] == [2, 1]
        assert store.get(2).status == IdeaStatus.APPROVED

    def test_replace_all(self):
        store = IdeaStore([make_idea(1)])
        store.replace_all([make_idea(5), make_idea(6)])
        assert [idea.id for idea in store.ideas] == [5, 6]
