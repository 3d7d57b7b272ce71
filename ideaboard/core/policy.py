"""
Authorization policy.

Every role or ownership decision made by the moderation and deletion services
goes through `is_allowed(actor, resource, action)`. Handlers never compare
roles themselves.
"""

from enum import Enum
from typing import Any, Optional
import logging

from ideaboard.core.exception import AuthorizationDeniedError
from ideaboard.models.user import User, UserRole

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CHANGE_STATUS = "idea:change_status"
    DELETE_IDEA = "idea:delete"
    DELETE_COMMENT = "comment:delete"
    CHANGE_ROLE = "user:change_role"


class PolicyMatrix:
    # Actions a role may perform on any resource
    ROLE_POLICIES = {
        UserRole.ADMIN: ["*"],
        UserRole.USER: [],
    }

    # Actions the owner of a resource may perform on it, whatever their role
    OWNER_POLICIES = [Action.DELETE_IDEA, Action.DELETE_COMMENT]


def _owner_id(resource: Any) -> Optional[int]:
    # Ideas point at their author, comments and votes at their user
    for attr in ("author_id", "user_id"):
        owner = getattr(resource, attr, None)
        if owner is not None:
            return owner
    return None


def is_allowed(actor: Optional[User], resource: Any, action: Action) -> bool:
    if actor is None or not actor.is_active:
        return False

    allowed_by_role = PolicyMatrix.ROLE_POLICIES.get(actor.role, [])
    if "*" in allowed_by_role or action in allowed_by_role:
        return True

    if action in PolicyMatrix.OWNER_POLICIES:
        return resource is not None and _owner_id(resource) == actor.id

    return False


def authorize(actor: Optional[User], resource: Any, action: Action, message: str, **details: Any) -> None:
    """Raise AuthorizationDeniedError unless `actor` may perform `action` on `resource`."""
    if not is_allowed(actor, resource, action):
        actor_id = actor.id if actor is not None else None
        logger.warning(f"Denied {action.value} for user {actor_id} on {type(resource).__name__} {getattr(resource, 'id', None)}")
        raise AuthorizationDeniedError(message, **details)
