import enum
from ideaboard.db.database import Base
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func


class IdeaStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    ideas = relationship("Idea", back_populates="category")


class Idea(Base):
    __tablename__ = "ideas"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(
        Enum(IdeaStatus, name="idea_status", values_callable=lambda e: [m.value for m in e]),
        default=IdeaStatus.PENDING,
        nullable=False,
        index=True
    )

    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    # Denormalized count of live Comment rows, kept in step by the comment service
    comment_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    author = relationship("User", back_populates="ideas")
    category = relationship("Category", back_populates="ideas")
    # No ORM cascade: votes and comments are removed explicitly inside one transaction
    votes = relationship("Vote", back_populates="idea", order_by="Vote.id", passive_deletes=True)
    comments = relationship("Comment", back_populates="idea", passive_deletes=True)


class Vote(Base):
    __tablename__ = "votes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    idea_id = Column(Integer, ForeignKey("ideas.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    user = relationship("User", back_populates="votes")
    idea = relationship("Idea", back_populates="votes")

    # Row existence is the "voted" flag; at most one per (user, idea)
    __table_args__ = (
        UniqueConstraint('user_id', 'idea_id', name='unique_user_vote_per_idea'),
    )


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    idea_id = Column(Integer, ForeignKey("ideas.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    idea = relationship("Idea", back_populates="comments")
    user = relationship("User", back_populates="comments")
