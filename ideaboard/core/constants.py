"""
Application Constants

Centralized location for all application constants, organized by domain.
This makes it easy to maintain and update values across the entire application.
"""

# =============================================================================
# API Configuration
# =============================================================================

class APIConfig:
    """API-level configuration constants"""

    # API Versioning
    API_V1_PREFIX = "/api/v1"
    API_VERSION = "1.0.0"
    API_TITLE = "Idea Board API"
    API_DESCRIPTION = """
    A feature idea board where users submit ideas, vote on them and discuss them,
    while administrators moderate ideas on a Kanban board.

    ## Features
    - User authentication and registration
    - Idea submission with categories
    - One-click vote toggling
    - Comments with live comment counts
    - Moderation workflow (pending / approved / rejected)
    """

    # CORS Configuration
    ALLOWED_ORIGINS = [
        "http://localhost:3000",  # React dev server
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# =============================================================================
# Authentication & Security
# =============================================================================

class AuthConfig:
    """Authentication and security constants"""

    # JWT Configuration
    ACCESS_TOKEN_EXPIRE_MINUTES = 30
    ALGORITHM = "HS256"
    TOKEN_TYPE = "bearer"
    TOKEN_URL = "/api/v1/auth/token"

    # Password requirements
    MIN_PASSWORD_LENGTH = 8
    MAX_PASSWORD_LENGTH = 128


# =============================================================================
# Business Logic Limits
# =============================================================================

class BusinessLimits:
    """Business rules and validation constants"""

    # Idea limits
    MIN_IDEA_TITLE_LENGTH = 3
    MAX_IDEA_TITLE_LENGTH = 200
    MAX_IDEA_DESCRIPTION_LENGTH = 5000

    # Comment limits
    MAX_COMMENT_LENGTH = 2000

    # User profile limits
    MAX_NAME_LENGTH = 100


# =============================================================================
# Error Messages
# =============================================================================

class ErrorMessages:
    """Standardized error messages"""

    # Authentication errors
    AUTH_REQUIRED = "Authentication required"
    INVALID_CREDENTIALS = "Incorrect email or password"

    # Authorization errors
    NOT_AUTHORIZED_STATUS = "Only administrators can change the status of an idea"
    NOT_AUTHORIZED_DELETE_IDEA = "Not authorized to delete this idea"
    NOT_AUTHORIZED_DELETE_COMMENT = "Not authorized to delete this comment"
    NOT_AUTHORIZED_ROLE = "Only administrators can change user roles"

    # Resource errors
    IDEA_NOT_FOUND = "Idea not found"
    COMMENT_NOT_FOUND = "Comment not found"
    CATEGORY_NOT_FOUND = "Category not found"
    USER_NOT_FOUND = "User not found"

    # Validation errors
    DUPLICATE_EMAIL = "Email already registered"
    EMPTY_COMMENT = "Comment content cannot be empty"

    # Business rule violations
    VOTE_CONFLICT = "Vote was already recorded by a concurrent request"

    # System errors
    DATABASE_ERROR = "Database operation failed"
    TRANSACTION_FAILED = "The operation could not be completed atomically and was rolled back"
    INTERNAL_ERROR = "An unexpected error occurred"
    VALIDATION_ERROR = "Validation failed"
    RETRY_HINT = "Something went wrong. Please try again."


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """Standardized error codes for API responses"""

    # Authentication & Authorization
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    AUTHORIZATION_DENIED = "AUTHORIZATION_DENIED"

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Business Logic
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    IDEA_NOT_FOUND = "IDEA_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    VOTE_CONFLICT = "VOTE_CONFLICT"

    # System
    DATABASE_ERROR = "DATABASE_ERROR"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Database Configuration
# =============================================================================

class DatabaseConfig:
    """Database-related constants"""

    DEFAULT_DATABASE_URL = "sqlite:///./ideaboard.db"


# =============================================================================
# Logging Configuration
# =============================================================================

class LoggingConfig:
    """Logging configuration constants"""

    # Log levels
    DEFAULT_LOG_LEVEL = "INFO"
    DATABASE_LOG_LEVEL = "WARNING"

    # Log formats
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

