"""
Idea, vote and comment response definitions.

Success bodies reference the component schemas by name; error bodies reuse
the shared builders from common_responses.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    CONTENT_TYPE_JSON,
    EXAMPLE_TIMESTAMP,
    get_forbidden_response,
    get_not_found_response,
    get_server_error_response,
    get_validation_error_response
)

# Constants for idea paths
IDEAS_BASE_PATH = "/api/v1/ideas"
IDEA_PATH = "/api/v1/ideas/1"
IDEA_COMMENTS_PATH = "/api/v1/ideas/1/comments"
VOTE_PATH = "/api/v1/vote"
COMMENT_PATH = "/api/v1/comments/1"

IDEA_EXAMPLE = {
    "id": 1,
    "title": "Dark mode for the dashboard",
    "description": "Late-night users would appreciate a darker theme",
    "status": "pending",
    "created_at": EXAMPLE_TIMESTAMP,
    "updated_at": EXAMPLE_TIMESTAMP,
    "author": {"id": 1, "name": "Ada", "email": "ada@example.com"},
    "category": {"id": 1, "name": "UI"},
    "votes": [],
    "comments": 0
}

COMMENT_EXAMPLE = {
    "id": 7,
    "idea_id": 1,
    "user_id": 2,
    "content": "Yes please, my eyes would thank you",
    "created_at": EXAMPLE_TIMESTAMP,
    "user": {"name": "Grace"}
}

IDEA_NOT_FOUND_RESPONSE = get_not_found_response("Idea not found", "IDEA_NOT_FOUND", IDEA_PATH, idea_id=1)


def _ok(description: str, example, schema_ref: str = None):
    content = {"example": example}
    if schema_ref:
        content["schema"] = {"$ref": f"#/components/schemas/{schema_ref}"}
    return {"description": description, "content": {CONTENT_TYPE_JSON: content}}


def get_idea_list_responses(**kwargs):
    return {
        200: _ok("Ideas with embedded author, category, votes and comment count", [IDEA_EXAMPLE]),
        500: get_server_error_response("DATABASE_ERROR", IDEAS_BASE_PATH)
    }


def get_idea_create_responses(**kwargs):
    return {
        201: _ok("Idea submitted; it starts out pending", IDEA_EXAMPLE, "IdeaRead"),
        401: AUTH_ERROR_RESPONSE,
        404: get_not_found_response("Category not found", "CATEGORY_NOT_FOUND", IDEAS_BASE_PATH, category_id=99),
        422: get_validation_error_response(IDEAS_BASE_PATH, ["body", "title"], "String should have at least 3 characters")
    }


def get_single_idea_responses(**kwargs):
    return {
        200: _ok("The idea", IDEA_EXAMPLE, "IdeaRead"),
        404: IDEA_NOT_FOUND_RESPONSE
    }


def get_idea_status_responses(**kwargs):
    return {
        200: _ok("Idea after the status change", {**IDEA_EXAMPLE, "status": "approved"}, "IdeaRead"),
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response("Only administrators can change the status of an idea", IDEA_PATH),
        404: IDEA_NOT_FOUND_RESPONSE,
        422: get_validation_error_response(IDEA_PATH, ["body", "status"], "Input should be 'pending', 'approved' or 'rejected'")
    }


def get_idea_delete_responses(**kwargs):
    return {
        200: _ok(
            "Idea, votes and comments deleted",
            {
                "message": "Idea and associated votes and comments deleted successfully",
                "idea_id": 1,
                "timestamp": EXAMPLE_TIMESTAMP
            },
            "IdeaDeleteResponse"
        ),
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response("Not authorized to delete this idea", IDEA_PATH),
        404: IDEA_NOT_FOUND_RESPONSE,
        500: get_server_error_response(
            "TRANSACTION_FAILED",
            IDEA_PATH,
            "The operation could not be completed atomically and was rolled back"
        )
    }


def get_vote_toggle_responses(**kwargs):
    return {
        200: {
            "description": "Vote cast or retracted",
            "content": {
                CONTENT_TYPE_JSON: {
                    "examples": {
                        "cast": {"summary": "Vote cast", "value": {"voted": True, "voteId": 12}},
                        "retracted": {"summary": "Vote retracted", "value": {"voted": False}}
                    }
                }
            }
        },
        401: AUTH_ERROR_RESPONSE,
        404: get_not_found_response("Idea not found", "IDEA_NOT_FOUND", VOTE_PATH, idea_id=1)
    }


def get_comment_list_responses(**kwargs):
    return {
        200: _ok("Comments, newest first", [COMMENT_EXAMPLE]),
        404: get_not_found_response("Idea not found", "IDEA_NOT_FOUND", IDEA_COMMENTS_PATH, idea_id=1)
    }


def get_comment_create_responses(**kwargs):
    return {
        201: _ok("Comment created", COMMENT_EXAMPLE, "CommentRead"),
        400: {
            "description": "Empty comment",
            "content": {
                CONTENT_TYPE_JSON: {
                    "example": {
                        "message": "Comment content cannot be empty",
                        "error_code": "VALIDATION_ERROR",
                        "idea_id": 1,
                        "timestamp": EXAMPLE_TIMESTAMP,
                        "path": IDEA_COMMENTS_PATH
                    }
                }
            }
        },
        401: AUTH_ERROR_RESPONSE,
        404: get_not_found_response("Idea not found", "IDEA_NOT_FOUND", IDEA_COMMENTS_PATH, idea_id=1)
    }


def get_comment_delete_responses(**kwargs):
    return {
        200: _ok(
            "Comment deleted",
            {"message": "Comment deleted successfully", "comment_id": 1, "timestamp": EXAMPLE_TIMESTAMP},
            "CommentDeleteResponse"
        ),
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response("Not authorized to delete this comment", COMMENT_PATH),
        404: get_not_found_response("Comment not found", "COMMENT_NOT_FOUND", COMMENT_PATH, comment_id=1),
        500: get_server_error_response("TRANSACTION_FAILED", COMMENT_PATH)
    }
