from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ideaboard.db.database import get_db
from ideaboard.models.user import User
from ideaboard.schemas.user import UserRead, UserRoleUpdate
from ideaboard.api.v1.endpoints.dependencies import get_current_user
from ideaboard.api.v1.utils.errors import database_failure
from ideaboard.core.exception import IdeaBoardError
from ideaboard.services import users as user_service
from ideaboard.api.v1.responses import get_user_profile_responses, get_user_role_responses

# Setup logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead, responses=get_user_profile_responses())
def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Return the profile of the authenticated user.

    Clients use it to learn their own id and role, e.g. to decide whether the
    Kanban board allows dragging cards.
    """
    logger.info(f"Profile requested by user {current_user.id}")
    return current_user


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Change the role of a user",
    description="Administrators promote users to ADMIN or demote them to USER. Re-applying the current role succeeds without changes.",
    responses=get_user_role_responses()
)
def update_user_role(
    user_id: int,
    update: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        logger.info(f"User {current_user.id} setting role of user {user_id} to {update.role.value}")
        return user_service.set_role(db, user_id, update.role, current_user)
    except IdeaBoardError:
        raise
    except SQLAlchemyError as e:
        raise database_failure(db, f"update role of user {user_id}", e, user_id=user_id)
