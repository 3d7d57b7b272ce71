"""
Role administration.

Registration always creates regular users; administrators promote or demote
accounts here.
"""

import logging

from sqlalchemy.orm import Session

from ideaboard.core.constants import ErrorCodes, ErrorMessages
from ideaboard.core.exception import NotFoundError
from ideaboard.core.policy import Action, authorize
from ideaboard.models.user import User, UserRole

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.warning(f"User not found: ID {user_id}")
        raise NotFoundError(ErrorMessages.USER_NOT_FOUND, error_code=ErrorCodes.USER_NOT_FOUND, user_id=user_id)
    return user


def set_role(db: Session, user_id: int, new_role: UserRole, acting_user: User) -> User:
    new_role = UserRole(new_role)
    user = get_user(db, user_id)

    authorize(
        acting_user,
        user,
        Action.CHANGE_ROLE,
        ErrorMessages.NOT_AUTHORIZED_ROLE,
        user_id=user_id
    )

    if user.role == new_role:
        logger.info(f"User {user_id} already {new_role.value}; nothing to change")
        return user

    previous = user.role
    user.role = new_role
    db.commit()
    db.refresh(user)

    logger.info(f"User {user_id} moved from {previous.value} to {new_role.value} by user {acting_user.id}")
    return user
