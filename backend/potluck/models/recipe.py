from sqlmodel import SQLModel, Field, Column
from sqlalchemy import CheckConstraint, Text
from uuid import UUID, uuid4
from datetime import date, datetime, timezone
from typing import Optional


class Recipe(SQLModel, table=True):
    """A recipe posted into a group."""

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_recipe_rating_range"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Associations
    user_id: UUID = Field(foreign_key="user.id", ondelete="CASCADE", index=True)
    group_id: UUID = Field(foreign_key="group.id", ondelete="CASCADE", index=True)

    title: str = Field(max_length=200)

    # Where the recipe came from
    source_url: Optional[str] = Field(default=None, max_length=1000)
    source_name: Optional[str] = Field(default=None, max_length=200)

    image_url: Optional[str] = Field(default=None, max_length=500)

    # User annotations
    rating: Optional[int] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))
    cook_date: Optional[date] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
