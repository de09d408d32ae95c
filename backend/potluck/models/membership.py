from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from uuid import UUID, uuid4
from datetime import datetime, timezone
from enum import Enum


class MembershipRole(str, Enum):
    """Membership roles within a group."""

    ADMIN = "admin"
    MEMBER = "member"


class Membership(SQLModel, table=True):
    """Membership model for user-group relationships."""

    # Unique constraint on user-group combination
    __table_args__ = (UniqueConstraint("user_id", "group_id", name="uq_membership_user_group"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Foreign keys
    user_id: UUID = Field(foreign_key="user.id", ondelete="CASCADE", index=True)
    group_id: UUID = Field(foreign_key="group.id", ondelete="CASCADE", index=True)

    # Membership details
    role: MembershipRole = Field(default=MembershipRole.MEMBER)

    # Timestamps
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
