"""Builders for API payloads shared by the client tests"""

from ideaboard.schemas.idea import IdeaRead


def make_idea(idea_id, votes=(), status="pending", comments=0):
    """An IdeaRead as the server would send it; `votes` are voter ids"""
    return IdeaRead.model_validate({
        "id": idea_id,
        "title": f"Idea {idea_id}",
        "description": "Something useful",
        "status": status,
        "created_at": "2024-01-01T12:00:00",
        "updated_at": "2024-01-01T12:00:00",
        "author": {"id": 1, "name": "Ada", "email": "ada@example.com"},
        "category": {"id": 1, "name": "UI"},
        "votes": [
            {"id": 100 + n, "user_id": user_id, "idea_id": idea_id, "created_at": "2024-01-02T08:00:00"}
            for n, user_id in enumerate(votes)
        ],
        "comments": comments,
    })
