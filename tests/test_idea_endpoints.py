"""
API tests for listing, reading and submitting ideas.

These run the real application against the in-memory test database and check
the response contracts the board relies on.
"""

import pytest

from ideaboard.models.ideas import Category, Idea, IdeaStatus, Vote


@pytest.fixture
def board(db_session, test_user, test_user2, test_category):
    """Three ideas over two categories with 0, 2 and 1 votes"""
    other_category = Category(name="Performance")
    db_session.add(other_category)
    db_session.commit()

    ideas = [
        Idea(title="Dark mode", description="Darker theme", author_id=test_user.id,
             category_id=test_category.id, status=IdeaStatus.PENDING),
        Idea(title="Faster search", description="Index the titles", author_id=test_user2.id,
             category_id=other_category.id, status=IdeaStatus.APPROVED),
        Idea(title="Compact cards", description="Smaller cards, darker borders", author_id=test_user.id,
             category_id=test_category.id, status=IdeaStatus.REJECTED),
    ]
    for idea in ideas:
        db_session.add(idea)
        db_session.commit()

    db_session.add_all([
        Vote(user_id=test_user.id, idea_id=ideas[1].id),
        Vote(user_id=test_user2.id, idea_id=ideas[1].id),
        Vote(user_id=test_user2.id, idea_id=ideas[2].id),
    ])
    db_session.commit()
    return {
        "ideas": [idea.id for idea in ideas],
        "categories": (test_category.id, other_category.id),
    }


class TestListIdeas:
    """GET /api/v1/ideas"""

    def test_empty_board(self, client):
        response = client.get("/api/v1/ideas")

        assert response.status_code == 200
        assert response.json() == []

    def test_idea_shape(self, client, test_user, test_category, test_idea):
        response = client.get("/api/v1/ideas")

        assert response.status_code == 200
        [idea] = response.json()
        assert idea["id"] == test_idea.id
        assert idea["title"] == "Dark mode"
        assert idea["status"] == "pending"
        assert idea["author"] == {"id": test_user.id, "name": test_user.name, "email": test_user.email}
        assert idea["category"] == {"id": test_category.id, "name": test_category.name}
        assert idea["votes"] == []
        assert idea["comments"] == 0
        assert "created_at" in idea
        assert "updated_at" in idea

    def test_public_access(self, client, board):
        """Listing needs no token"""
        response = client.get("/api/v1/ideas")
        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_newest_first_by_default(self, client, board):
        ids = [idea["id"] for idea in client.get("/api/v1/ideas").json()]
        assert ids == list(reversed(board["ideas"]))

    def test_sort_by_votes(self, client, board):
        response = client.get("/api/v1/ideas", params={"sort": "most_votes"})

        ids = [idea["id"] for idea in response.json()]
        assert ids == [board["ideas"][1], board["ideas"][2], board["ideas"][0]]

    def test_filter_by_category(self, client, board):
        category_id = board["categories"][0]
        response = client.get("/api/v1/ideas", params={"category_id": category_id})

        data = response.json()
        assert len(data) == 2
        assert all(idea["category"]["id"] == category_id for idea in data)

    def test_filter_by_status(self, client, board):
        response = client.get("/api/v1/ideas", params={"status": "approved"})

        data = response.json()
        assert [idea["id"] for idea in data] == [board["ideas"][1]]

    def test_search_title_and_description(self, client, board):
        response = client.get("/api/v1/ideas", params={"search": "DARK"})

        ids = {idea["id"] for idea in response.json()}
        assert ids == {board["ideas"][0], board["ideas"][2]}

    def test_invalid_sort(self, client):
        assert client.get("/api/v1/ideas", params={"sort": "oldest"}).status_code == 422


class TestReadIdea:

    def test_get_idea(self, client, test_idea):
        response = client.get(f"/api/v1/ideas/{test_idea.id}")

        assert response.status_code == 200
        assert response.json()["id"] == test_idea.id

    def test_missing_idea(self, client):
        response = client.get("/api/v1/ideas/9999")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "IDEA_NOT_FOUND"
        assert data["message"] == "Idea not found"
        assert data["path"] == "/api/v1/ideas/9999"
        assert "request_id" in data
        assert "timestamp" in data


class TestSubmitIdea:
    """POST /api/v1/ideas"""

    def test_submit_idea(self, client, auth_headers, test_user, sample_idea_data):
        response = client.post("/api/v1/ideas", json=sample_idea_data, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == sample_idea_data["title"]
        assert data["status"] == "pending"
        assert data["author"]["id"] == test_user.id
        assert data["votes"] == []
        assert data["comments"] == 0

    def test_new_ideas_are_always_pending(self, client, admin_headers, sample_idea_data):
        """Even an administrator's idea starts in the pending column"""
        payload = {**sample_idea_data, "status": "approved"}
        response = client.post("/api/v1/ideas", json=payload, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["status"] == "pending"

    def test_title_is_trimmed(self, client, auth_headers, sample_idea_data):
        payload = {**sample_idea_data, "title": "   Bulk edit   "}
        response = client.post("/api/v1/ideas", json=payload, headers=auth_headers)

        assert response.json()["title"] == "Bulk edit"

    def test_submit_requires_authentication(self, client, db_session, sample_idea_data):
        response = client.post("/api/v1/ideas", json=sample_idea_data)

        assert response.status_code == 401
        assert db_session.query(Idea).count() == 0

    @pytest.mark.parametrize("field, value", [
        ("title", ""),
        ("title", "ab"),
        ("title", "     "),
        ("description", ""),
        ("category_id", 0),
    ])
    def test_invalid_payload(self, client, auth_headers, sample_idea_data, field, value):
        payload = {**sample_idea_data, field: value}
        response = client.post("/api/v1/ideas", json=payload, headers=auth_headers)
        assert response.status_code == 422

    def test_unknown_category(self, client, auth_headers, sample_idea_data):
        payload = {**sample_idea_data, "category_id": 9999}
        response = client.post("/api/v1/ideas", json=payload, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"
