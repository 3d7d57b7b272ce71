from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import datetime
from typing import Optional, List

from ideaboard.core.constants import BusinessLimits
from ideaboard.models.ideas import IdeaStatus


# Embedded references
class AuthorRead(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class CommenterRead(BaseModel):
    """Only the display name of a commenter is exposed"""
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


# Schema for submitting a new idea
class IdeaCreate(BaseModel):
    title: str = Field(
        ...,
        min_length=BusinessLimits.MIN_IDEA_TITLE_LENGTH,
        max_length=BusinessLimits.MAX_IDEA_TITLE_LENGTH,
        description=f'Idea title ({BusinessLimits.MIN_IDEA_TITLE_LENGTH}-{BusinessLimits.MAX_IDEA_TITLE_LENGTH} characters)',
        json_schema_extra={"example": "Dark mode for the dashboard"}
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=BusinessLimits.MAX_IDEA_DESCRIPTION_LENGTH,
        json_schema_extra={"example": "Late-night users would appreciate a darker theme"}
    )
    category_id: int = Field(..., gt=0, description="Category the idea belongs to")

    @field_validator('title', 'description')
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Value cannot be empty or just whitespace')
        return v.strip()


class IdeaStatusUpdate(BaseModel):
    """Body of a moderation request; only the status may change"""
    status: IdeaStatus = Field(..., description="New moderation status")


class VoteRead(BaseModel):
    id: int
    user_id: int = Field(..., description="ID of the user who voted")
    idea_id: int = Field(..., description="ID of the idea voted on")
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Schema for reading idea data, with embedded aggregates
class IdeaRead(BaseModel):
    id: int
    title: str
    description: str
    status: IdeaStatus
    created_at: datetime
    updated_at: datetime
    author: AuthorRead
    category: CategoryRead
    votes: List[VoteRead] = Field(default_factory=list)
    comments: int = Field(0, description="Number of comments on the idea")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Dark mode for the dashboard",
                "description": "Late-night users would appreciate a darker theme",
                "status": "pending",
                "created_at": "2024-01-01T12:00:00Z",
                "updated_at": "2024-01-01T12:00:00Z",
                "author": {"id": 1, "name": "Ada", "email": "ada@example.com"},
                "category": {"id": 1, "name": "UI"},
                "votes": [{"id": 3, "user_id": 2, "idea_id": 1, "created_at": "2024-01-02T08:00:00Z"}],
                "comments": 2
            }
        }
    )

    @property
    def vote_count(self) -> int:
        return len(self.votes)

    def has_voted(self, user_id: int) -> bool:
        return any(vote.user_id == user_id for vote in self.votes)


class IdeaDeleteResponse(BaseModel):
    message: str
    idea_id: int
    timestamp: str
    deleted_idea: Optional[IdeaRead] = Field(
        None,
        description="The removed record, returned when an administrator deletes another user's idea"
    )


# Vote Schemas
class VoteToggleRequest(BaseModel):
    idea_id: int = Field(..., gt=0, alias="ideaId")

    model_config = ConfigDict(populate_by_name=True)


class VoteToggleResponse(BaseModel):
    voted: bool = Field(..., description="Whether the caller has a vote on the idea after the toggle")
    vote_id: Optional[int] = Field(None, alias="voteId", description="ID of the vote when one exists")

    model_config = ConfigDict(populate_by_name=True)


# Comment Schemas
class CommentCreate(BaseModel):
    # Emptiness is checked by the comment service so it can answer 400
    content: str = Field(..., max_length=BusinessLimits.MAX_COMMENT_LENGTH)


class CommentRead(BaseModel):
    id: int
    idea_id: int
    user_id: int
    content: str
    created_at: datetime
    user: CommenterRead

    model_config = ConfigDict(from_attributes=True)


class CommentDeleteResponse(BaseModel):
    message: str
    comment_id: int
    timestamp: str
