from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Text
from uuid import UUID, uuid4
from datetime import datetime, timezone


class Comment(SQLModel, table=True):
    """Comment model for discussions on recipes."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Associations
    recipe_id: UUID = Field(foreign_key="recipe.id", ondelete="CASCADE", index=True)
    user_id: UUID = Field(foreign_key="user.id", ondelete="CASCADE", index=True)

    # Comment content
    content: str = Field(sa_column=Column(Text, nullable=False))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
