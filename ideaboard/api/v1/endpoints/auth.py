from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
import logging

from ideaboard.db.database import get_db
from ideaboard.models.user import User, UserRole
from ideaboard.schemas.user import UserCreate, UserRead
from ideaboard.core.security import verify_password, create_access_token, get_password_hash
from ideaboard.core.security import ACCESS_TOKEN_EXPIRE_MINUTES
from ideaboard.core.constants import ErrorMessages, ErrorCodes, AuthConfig
from ideaboard.api.v1.responses import (
    get_registration_responses,
    get_login_responses
)

# Setup logging
logger = logging.getLogger(__name__)


class Token(BaseModel):
    access_token: str
    token_type: str = AuthConfig.TOKEN_TYPE


class LoginRequest(BaseModel):
    email: str
    password: str


router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_token(user: User) -> dict:
    access_token = create_access_token(
        data={"sub": user.email},  # 'sub' (subject) is the user's email.
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return {"access_token": access_token, "token_type": AuthConfig.TOKEN_TYPE}


def _authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()

    if not user or not user.is_active or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login attempt for email: {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "message": ErrorMessages.INVALID_CREDENTIALS,
                "error_code": ErrorCodes.INVALID_CREDENTIALS
            },
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED, responses=get_registration_responses())
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user account.

    New accounts always get the USER role; administrators are promoted out of band.
    """
    try:
        logger.info(f"Registration attempt for email: {user.email}")

        existing_email = db.query(User).filter(User.email == user.email).first()
        if existing_email:
            logger.warning(f"Registration failed: Email '{user.email}' already exists")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "message": ErrorMessages.DUPLICATE_EMAIL,
                    "error_code": ErrorCodes.DUPLICATE_RESOURCE,
                    "email": user.email
                }
            )

        db_user = User(
            email=user.email,
            name=user.name.strip(),
            hashed_password=get_password_hash(user.password),
            role=UserRole.USER,
            is_active=True
        )

        db.add(db_user)
        db.commit()
        db.refresh(db_user)

        logger.info(f"User registered successfully: ID {db_user.id}, email: {db_user.email}")
        return db_user

    except HTTPException:
        # Re-raise properly formatted HTTP errors
        raise
    except IntegrityError as e:
        # Two registrations for the same email raced past the lookup
        db.rollback()
        logger.error(f"Database integrity error during registration: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": ErrorMessages.DUPLICATE_EMAIL,
                "error_code": ErrorCodes.DUPLICATE_RESOURCE
            }
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during registration: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": ErrorMessages.DATABASE_ERROR,
                "error_code": ErrorCodes.DATABASE_ERROR
            }
        )


@router.post("/token", response_model=Token, responses=get_login_responses())
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT token. Uses OAuth2 compatible form data.

    IMPORTANT: In the 'username' field, enter the user's EMAIL ADDRESS.
    """
    try:
        logger.info(f"OAuth2 token request for email: {form_data.username}")
        user = _authenticate(db, form_data.username, form_data.password)
        logger.info(f"Token generated successfully for user: {user.email}")
        return _issue_token(user)

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Database error during token generation: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": ErrorMessages.DATABASE_ERROR,
                "error_code": ErrorCodes.DATABASE_ERROR
            }
        )


@router.post("/login", response_model=Token, responses=get_login_responses())
def simple_login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Simple login endpoint - easier to use than OAuth2 form.

    Just provide email and password in JSON format.
    """
    try:
        logger.info(f"Simple login attempt for email: {login_data.email}")
        user = _authenticate(db, login_data.email, login_data.password)
        logger.info(f"Login successful for user: {user.email}")
        return _issue_token(user)

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Database error during login: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": ErrorMessages.DATABASE_ERROR,
                "error_code": ErrorCodes.DATABASE_ERROR
            }
        )
