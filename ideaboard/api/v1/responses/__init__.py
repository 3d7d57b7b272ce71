"""
Response definitions for FastAPI endpoints.

This module provides centralized response configurations for OpenAPI documentation,
promoting reusability and maintainability across all API endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    VALIDATION_ERROR_RESPONSE,
    SERVER_ERROR_RESPONSE,
    get_validation_error_response,
    get_server_error_response,
    get_forbidden_response,
    get_not_found_response,
)

from .idea_responses import (
    get_idea_list_responses,
    get_idea_create_responses,
    get_single_idea_responses,
    get_idea_status_responses,
    get_idea_delete_responses,
    get_vote_toggle_responses,
    get_comment_list_responses,
    get_comment_create_responses,
    get_comment_delete_responses,
)

from .auth_responses import (
    get_registration_responses,
    get_login_responses,
)

from .user_responses import (
    get_user_profile_responses,
    get_user_role_responses,
)

__all__ = [
    # Common responses
    "AUTH_ERROR_RESPONSE",
    "VALIDATION_ERROR_RESPONSE",
    "SERVER_ERROR_RESPONSE",
    "get_validation_error_response",
    "get_server_error_response",
    "get_forbidden_response",
    "get_not_found_response",

    # Idea, vote and comment responses
    "get_idea_list_responses",
    "get_idea_create_responses",
    "get_single_idea_responses",
    "get_idea_status_responses",
    "get_idea_delete_responses",
    "get_vote_toggle_responses",
    "get_comment_list_responses",
    "get_comment_create_responses",
    "get_comment_delete_responses",

    # Auth-specific responses
    "get_registration_responses",
    "get_login_responses",

    # User-specific responses
    "get_user_profile_responses",
    "get_user_role_responses",
]
