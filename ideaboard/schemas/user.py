from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional

from ideaboard.core.constants import AuthConfig, BusinessLimits
from ideaboard.models.user import UserRole


# Define a schema for creating a new user
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(
        ...,
        min_length=AuthConfig.MIN_PASSWORD_LENGTH,
        max_length=AuthConfig.MAX_PASSWORD_LENGTH
    )
    name: str = Field(..., min_length=1, max_length=BusinessLimits.MAX_NAME_LENGTH)


# Define a schema for reading user data
class UserRead(BaseModel):
    id: int
    email: EmailStr
    name: str
    role: UserRole
    is_active: Optional[bool] = True

    # Enable ORM mode to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)


class UserRoleUpdate(BaseModel):
    role: UserRole
