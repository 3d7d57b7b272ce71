from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from datetime import datetime, timezone
import logging
from typing import Any, Dict, Optional
import traceback
import uuid

from ideaboard.core.constants import ErrorCodes, ErrorMessages

logger = logging.getLogger(__name__)


# =============================================================================
# Domain exceptions
# =============================================================================

class IdeaBoardError(Exception):
    """
    Base class for failures raised by the idea services.

    Each subclass maps to one HTTP status; `details` is merged into the JSON
    error envelope so clients get the offending ids back.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = ErrorCodes.INTERNAL_ERROR

    def __init__(self, message: str, error_code: Optional[str] = None, **details: Any):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details: Dict[str, Any] = details


class AuthenticationRequiredError(IdeaBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCodes.AUTHENTICATION_REQUIRED

    def __init__(self, message: str = ErrorMessages.AUTH_REQUIRED, **details: Any):
        super().__init__(message, **details)


class AuthorizationDeniedError(IdeaBoardError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = ErrorCodes.AUTHORIZATION_DENIED


class InvalidInputError(IdeaBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCodes.VALIDATION_ERROR


class NotFoundError(IdeaBoardError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCodes.RESOURCE_NOT_FOUND


class ConflictError(IdeaBoardError):
    """A concurrent request already applied the same change (lost unique-constraint race)."""
    status_code = status.HTTP_409_CONFLICT
    error_code = ErrorCodes.VOTE_CONFLICT


class TransactionFailureError(IdeaBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = ErrorCodes.TRANSACTION_FAILED

    def __init__(self, message: str = ErrorMessages.TRANSACTION_FAILED, **details: Any):
        super().__init__(message, **details)


# =============================================================================
# Exception handlers
# =============================================================================

def _envelope(request: Request, request_id: str, **content: Any) -> Dict[str, Any]:
    return {
        **content,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": str(request.url.path),
        "request_id": request_id
    }


async def validation_exception_handler(request: Request, exc: ValidationError):
    """
    Custom handler for Pydantic validation errors raised outside request parsing
    """
    # Generate unique request ID for tracing
    request_id = str(uuid.uuid4())[:8]
    client_ip = request.client.host if request.client else "unknown"

    logger.warning(
        f"Validation error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"IP: {client_ip} - "
        f"Errors: {len(exc.errors())} - "
        f"Details: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_envelope(
            request,
            request_id,
            message=ErrorMessages.VALIDATION_ERROR,
            error_code=ErrorCodes.VALIDATION_ERROR,
            errors=exc.errors(include_url=False, include_context=False)
        )
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Enhanced HTTP exception handler
    """
    request_id = str(uuid.uuid4())[:8]
    client_ip = request.client.host if request.client else "unknown"

    # Enhanced logging based on error severity
    if exc.status_code >= 500:
        logger.error(
            f"Server error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path} - "
            f"IP: {client_ip} - "
            f"Detail: {exc.detail}"
        )
    elif exc.status_code >= 400:
        logger.warning(
            f"Client error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path} - "
            f"IP: {client_ip}"
        )

    # Format response based on detail type
    if isinstance(exc.detail, dict):
        response_content = _envelope(request, request_id, **exc.detail)
    else:
        response_content = _envelope(
            request,
            request_id,
            message=str(exc.detail),
            error_code="HTTP_ERROR"
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=response_content,
        headers=getattr(exc, "headers", None)
    )


async def idea_board_exception_handler(request: Request, exc: IdeaBoardError):
    """
    Render a domain failure in the same envelope as every other error.
    """
    request_id = str(uuid.uuid4())[:8]

    if exc.status_code >= 500:
        logger.error(
            f"Domain failure [ID: {request_id}] - "
            f"Path: {request.url.path} - "
            f"Code: {exc.error_code} - "
            f"Message: {exc.message}"
        )
    else:
        logger.warning(
            f"Request rejected [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path} - "
            f"Code: {exc.error_code}"
        )

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            request,
            request_id,
            message=exc.message,
            error_code=exc.error_code,
            **exc.details
        ),
        headers=headers
    )


async def database_exception_handler(request: Request, exc: Exception):
    """
    Handler for database-related exceptions that escaped the endpoints
    """
    request_id = str(uuid.uuid4())[:8]

    logger.error(
        f"Database error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"Error: {str(exc)} - "
        f"Type: {type(exc).__name__}"
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            request,
            request_id,
            message=ErrorMessages.DATABASE_ERROR,
            error_code=ErrorCodes.DATABASE_ERROR,
            hint="Please try again later or contact support"
        )
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler for unexpected errors
    """
    request_id = str(uuid.uuid4())[:8]

    # Get full traceback for debugging
    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.critical(
        f"Unexpected error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"Error: {str(exc)} - "
        f"Type: {type(exc).__name__} - "
        f"Traceback: {tb_str}"
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            request,
            request_id,
            message=ErrorMessages.INTERNAL_ERROR,
            error_code=ErrorCodes.INTERNAL_ERROR
        )
    )
