"""
Authentication-specific response definitions for FastAPI endpoints.
"""

from .common_responses import (
    AUTH_ERROR_RESPONSE,
    get_validation_error_response,
    CONTENT_TYPE_JSON,
    EXAMPLE_TIMESTAMP
)

# Constants for auth paths
AUTH_BASE_PATH = "/api/v1/auth"
REGISTER_PATH = f"{AUTH_BASE_PATH}/register"
LOGIN_PATH = f"{AUTH_BASE_PATH}/login"

USER_REGISTRATION_SUCCESS_EXAMPLE = {
    "id": 1,
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "role": "USER",
    "is_active": True
}

TOKEN_SUCCESS_EXAMPLE = {
    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "token_type": "bearer"
}


def get_registration_responses(**kwargs):
    return {
        201: {
            "description": "User registered",
            "content": {CONTENT_TYPE_JSON: {"example": USER_REGISTRATION_SUCCESS_EXAMPLE}}
        },
        400: {
            "description": "Email already registered",
            "content": {
                CONTENT_TYPE_JSON: {
                    "example": {
                        "message": "Email already registered",
                        "error_code": "DUPLICATE_RESOURCE",
                        "email": "ada@example.com",
                        "timestamp": EXAMPLE_TIMESTAMP,
                        "path": REGISTER_PATH
                    }
                }
            }
        },
        422: get_validation_error_response(REGISTER_PATH, ["body", "email"], "value is not a valid email address")
    }


def get_login_responses(**kwargs):
    return {
        200: {
            "description": "Bearer token issued",
            "content": {CONTENT_TYPE_JSON: {"example": TOKEN_SUCCESS_EXAMPLE}}
        },
        401: {
            **AUTH_ERROR_RESPONSE,
            "description": "Incorrect email or password"
        }
    }
