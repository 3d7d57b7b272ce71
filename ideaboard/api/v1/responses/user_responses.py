"""
User-specific response definitions for FastAPI endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    CONTENT_TYPE_JSON,
    get_forbidden_response,
    get_not_found_response,
    get_validation_error_response,
)


def get_user_profile_responses(**kwargs):
    return {
        200: {
            "description": "The authenticated user's profile",
            "content": {
                CONTENT_TYPE_JSON: {
                    "example": {
                        "id": 1,
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "role": "ADMIN",
                        "is_active": True
                    }
                }
            }
        },
        401: AUTH_ERROR_RESPONSE
    }


USER_PATH = "/api/v1/users/2"


def get_user_role_responses(**kwargs):
    return {
        200: {
            "description": "The user after the role change",
            "content": {
                CONTENT_TYPE_JSON: {
                    "example": {
                        "id": 2,
                        "name": "Grace Hopper",
                        "email": "grace@example.com",
                        "role": "ADMIN",
                        "is_active": True
                    }
                }
            }
        },
        401: AUTH_ERROR_RESPONSE,
        403: get_forbidden_response("Only administrators can change user roles", USER_PATH),
        404: get_not_found_response("User not found", "USER_NOT_FOUND", USER_PATH, user_id=2),
        422: get_validation_error_response(USER_PATH, ["body", "role"], "Input should be 'USER' or 'ADMIN'")
    }
