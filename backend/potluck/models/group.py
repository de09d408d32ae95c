from sqlmodel import SQLModel, Field
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional


def generate_invite_code() -> str:
    """Short, upper-case invite code taken from a random UUID."""
    return uuid4().hex[:8].upper()


class Group(SQLModel, table=True):
    """Group model for organizing users into recipe-sharing circles."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=500)

    # Capability token granting join rights
    invite_code: str = Field(
        default_factory=generate_invite_code, unique=True, index=True, max_length=32
    )

    # Ownership
    created_by: Optional[UUID] = Field(default=None, foreign_key="user.id", ondelete="SET NULL")

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
