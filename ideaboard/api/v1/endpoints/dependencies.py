from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Optional
import logging

from ideaboard.db.database import get_db
from ideaboard.models.user import User
from ideaboard.core.constants import AuthConfig
from ideaboard.core.exception import AuthenticationRequiredError
from ideaboard.core.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error is off so a missing token surfaces as our own AuthenticationRequiredError
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=AuthConfig.TOKEN_URL, auto_error=False)


def _user_from_token(db: Session, token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    email = decode_access_token(token)
    if email is None:
        return None
    user = db.query(User).filter(User.email == email).first()
    if user is None or not user.is_active:
        return None
    return user


def get_current_user(db: Session = Depends(get_db), token: Optional[str] = Depends(oauth2_scheme)) -> User:
    """Get the current user from the database.
    Any endpoint that requires authentication can use this dependency.
    """
    user = _user_from_token(db, token)
    if user is None:
        logger.warning("Rejected request without a valid session")
        raise AuthenticationRequiredError(hint="Send a valid bearer token obtained from /auth/login")
    return user


def get_current_user_optional(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme)
) -> Optional[User]:
    """Get the current user from the database, but don't raise an error if no token is provided.
    Returns None if no valid authentication is provided.
    """
    return _user_from_token(db, token)
