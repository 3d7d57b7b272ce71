"""
Helpers for turning storage failures into the API's error envelope.
"""

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from ideaboard.core.constants import ErrorMessages, ErrorCodes

logger = logging.getLogger(__name__)


def database_failure(db: Session, action: str, error: SQLAlchemyError, **context) -> HTTPException:
    """Roll back the request's session and build the 500 response to raise."""
    logger.error(f"Database error while trying to {action}: {error}")
    db.rollback()
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "message": ErrorMessages.DATABASE_ERROR,
            "error_code": ErrorCodes.DATABASE_ERROR,
            **context
        }
    )
