from datetime import date, datetime
from uuid import UUID
from typing import Optional

from .common import APIModel


class AuthorRef(APIModel):
    id: UUID
    name: str
    avatar_url: Optional[str] = None


class GroupRef(APIModel):
    id: UUID
    name: str


class RecipeResponse(APIModel):
    """Recipe as it appears in the feed."""

    id: UUID
    title: str
    source_url: Optional[str] = None
    source_name: Optional[str] = None
    image_url: Optional[str] = None
    rating: Optional[int] = None
    notes: Optional[str] = None
    cook_date: Optional[date] = None
    created_at: datetime
    author: AuthorRef
    group: GroupRef


class CommentResponse(APIModel):
    id: UUID
    content: str
    created_at: datetime
    author: AuthorRef


class RecipeDetail(RecipeResponse):
    """Recipe with its comments, oldest first."""

    comments: list[CommentResponse]


class CommentCreate(APIModel):
    content: str = ""


class RecipeCreatedResponse(APIModel):
    message: str
    recipe_id: UUID


class CommentCreatedResponse(APIModel):
    message: str
    comment_id: UUID
