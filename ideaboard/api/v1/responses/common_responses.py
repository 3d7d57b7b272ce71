"""
Common reusable response definitions for FastAPI endpoints.

This module contains response configurations that are shared across multiple endpoints,
promoting consistency and reducing duplication in OpenAPI documentation.
"""

from ideaboard.schemas.error import (
    ValidationErrorResponse,
    AuthErrorResponse,
    NotFoundErrorResponse,
    ServerErrorResponse
)

# Constants for common values
CONTENT_TYPE_JSON = "application/json"
EXAMPLE_TIMESTAMP = "2024-01-01T12:00:00Z"
EXAMPLE_API_PATH = "/api/v1/endpoint"
VALIDATION_FAILED_MESSAGE = "Validation failed"
VALIDATION_ERROR_CODE = "VALIDATION_ERROR"


# Common authentication error response
AUTH_ERROR_RESPONSE = {
    "description": "Authentication required",
    "model": AuthErrorResponse,
    "content": {
        CONTENT_TYPE_JSON: {
            "example": {
                "message": "Authentication required",
                "error_code": "AUTHENTICATION_REQUIRED",
                "timestamp": EXAMPLE_TIMESTAMP,
                "path": EXAMPLE_API_PATH
            }
        }
    }
}


def get_forbidden_response(message: str, path: str = EXAMPLE_API_PATH):
    """Generate an authorization error response for a role or ownership check."""
    return {
        "description": "Not allowed for this user",
        "model": AuthErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": {
                    "message": message,
                    "error_code": "AUTHORIZATION_DENIED",
                    "timestamp": EXAMPLE_TIMESTAMP,
                    "path": path
                }
            }
        }
    }


def get_not_found_response(message: str, error_code: str, path: str = EXAMPLE_API_PATH, **ids):
    """Generate a not found response naming the missing resource."""
    return {
        "description": message,
        "model": NotFoundErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": {
                    "message": message,
                    "error_code": error_code,
                    **ids,
                    "timestamp": EXAMPLE_TIMESTAMP,
                    "path": path
                }
            }
        }
    }


# Common validation error response
def get_validation_error_response(path: str = EXAMPLE_API_PATH, loc=None, msg: str = "Field required"):
    """Generate validation error response with context-specific path."""
    return {
        "description": "Validation error",
        "model": ValidationErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": {
                    "message": VALIDATION_FAILED_MESSAGE,
                    "error_code": VALIDATION_ERROR_CODE,
                    "errors": [
                        {
                            "loc": loc or ["body"],
                            "msg": msg,
                            "type": "value_error"
                        }
                    ],
                    "timestamp": EXAMPLE_TIMESTAMP,
                    "path": path
                }
            }
        }
    }


# Common server error response
def get_server_error_response(error_code: str = "INTERNAL_ERROR", path: str = EXAMPLE_API_PATH,
                              message: str = "An unexpected error occurred"):
    """Generate server error response with context-specific error code and path."""
    return {
        "description": "Internal server error",
        "model": ServerErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": {
                    "message": message,
                    "error_code": error_code,
                    "timestamp": EXAMPLE_TIMESTAMP,
                    "path": path
                }
            }
        }
    }


# Shorthand references for common responses
VALIDATION_ERROR_RESPONSE = get_validation_error_response()
SERVER_ERROR_RESPONSE = get_server_error_response()
