"""
Tests for comments and the comment counter kept on each idea.
"""

import pytest

from ideaboard.core.exception import AuthorizationDeniedError, InvalidInputError, NotFoundError
from ideaboard.models.ideas import Comment, Idea, Vote
from ideaboard.services.comments import add_comment, count_live_comments, list_comments
from ideaboard.services.deletion import delete_comment


def _counter(db_session, idea_id):
    db_session.expire_all()
    return db_session.query(Idea).filter(Idea.id == idea_id).one().comment_count


class TestCommentService:

    def test_add_comment_bumps_counter(self, db_session, test_user, test_idea):
        comment = add_comment(db_session, test_idea.id, test_user, "  Love it  ")

        assert comment.id is not None
        assert comment.content == "Love it"
        assert comment.user_id == test_user.id
        assert _counter(db_session, test_idea.id) == 1

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    def test_blank_comment_is_rejected(self, db_session, test_user, test_idea, content):
        with pytest.raises(InvalidInputError):
            add_comment(db_session, test_idea.id, test_user, content)

        assert count_live_comments(db_session, test_idea.id) == 0
        assert _counter(db_session, test_idea.id) == 0

    def test_comment_on_missing_idea(self, db_session, test_user):
        with pytest.raises(NotFoundError):
            add_comment(db_session, 9999, test_user, "Hello?")

    def test_counter_tracks_adds_and_deletes(self, db_session, test_user, test_user2, test_idea):
        """After N adds the counter is N; deleting one makes it N-1"""
        comments = [
            add_comment(db_session, test_idea.id, author, f"Comment {i}")
            for i, author in enumerate([test_user, test_user2, test_user, test_user2])
        ]
        assert _counter(db_session, test_idea.id) == 4

        delete_comment(db_session, comments[1].id, test_user2)

        assert _counter(db_session, test_idea.id) == 3
        assert count_live_comments(db_session, test_idea.id) == 3

    def test_list_is_newest_first(self, db_session, test_user, test_idea):
        first = add_comment(db_session, test_idea.id, test_user, "First")
        second = add_comment(db_session, test_idea.id, test_user, "Second")

        listed = list_comments(db_session, test_idea.id)

        assert [c.id for c in listed] == [second.id, first.id]
        assert listed[0].user.name == test_user.name

    def test_deleting_comment_keeps_votes(self, db_session, test_user, test_idea):
        db_session.add(Vote(user_id=test_user.id, idea_id=test_idea.id))
        db_session.commit()
        comment = add_comment(db_session, test_idea.id, test_user, "Keep my vote")

        delete_comment(db_session, comment.id, test_user)

        assert db_session.query(Vote).filter(Vote.idea_id == test_idea.id).count() == 1

    def test_only_author_or_admin_deletes(self, db_session, test_user, test_user2, admin_user, test_idea):
        comment = add_comment(db_session, test_idea.id, test_user, "Mine")
        comment_id = comment.id

        with pytest.raises(AuthorizationDeniedError):
            delete_comment(db_session, comment_id, test_user2)
        assert db_session.query(Comment).filter(Comment.id == comment_id).count() == 1

        delete_comment(db_session, comment_id, admin_user)
        assert db_session.query(Comment).filter(Comment.id == comment_id).count() == 0

    def test_delete_missing_comment(self, db_session, test_user):
        with pytest.raises(NotFoundError):
            delete_comment(db_session, 9999, test_user)


class TestCommentEndpoints:

    def test_post_comment(self, client, auth_headers, test_user, test_idea):
        response = client.post(
            f"/api/v1/ideas/{test_idea.id}/comments",
            json={"content": "Great idea"},
            headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["content"] == "Great idea"
        assert data["idea_id"] == test_idea.id
        assert data["user"] == {"name": test_user.name}

        idea = client.get(f"/api/v1/ideas/{test_idea.id}").json()
        assert idea["comments"] == 1

    def test_empty_comment_answers_400(self, client, auth_headers, test_idea):
        response = client.post(
            f"/api/v1/ideas/{test_idea.id}/comments",
            json={"content": "   "},
            headers=auth_headers
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["message"] == "Comment content cannot be empty"

    def test_comment_requires_authentication(self, client, db_session, test_idea):
        response = client.post(f"/api/v1/ideas/{test_idea.id}/comments", json={"content": "Hi"})

        assert response.status_code == 401
        assert count_live_comments(db_session, test_idea.id) == 0

    def test_comment_on_missing_idea(self, client, auth_headers):
        response = client.post("/api/v1/ideas/9999/comments", json={"content": "Hi"}, headers=auth_headers)
        assert response.status_code == 404

    def test_list_comments_is_public(self, client, auth_headers, test_idea):
        for text in ("One", "Two"):
            client.post(f"/api/v1/ideas/{test_idea.id}/comments", json={"content": text}, headers=auth_headers)

        response = client.get(f"/api/v1/ideas/{test_idea.id}/comments")

        assert response.status_code == 200
        assert [c["content"] for c in response.json()] == ["Two", "One"]

    def test_delete_comment_endpoint(self, client, auth_headers, test_idea):
        created = client.post(
            f"/api/v1/ideas/{test_idea.id}/comments",
            json={"content": "Oops"},
            headers=auth_headers
        ).json()

        response = client.delete(f"/api/v1/comments/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["comment_id"] == created["id"]
        assert "timestamp" in data
        assert client.get(f"/api/v1/ideas/{test_idea.id}").json()["comments"] == 0

    def test_other_user_cannot_delete_comment(self, client, auth_headers, auth_headers2, test_idea):
        created = client.post(
            f"/api/v1/ideas/{test_idea.id}/comments",
            json={"content": "Mine"},
            headers=auth_headers
        ).json()

        response = client.delete(f"/api/v1/comments/{created['id']}", headers=auth_headers2)

        assert response.status_code == 403
        assert client.get(f"/api/v1/ideas/{test_idea.id}").json()["comments"] == 1

    def test_delete_missing_comment(self, client, auth_headers):
        response = client.delete("/api/v1/comments/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "COMMENT_NOT_FOUND"
