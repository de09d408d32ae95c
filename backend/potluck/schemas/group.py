from datetime import datetime
from uuid import UUID
from typing import Optional

from pydantic import Field

from .common import APIModel
from ..models.membership import MembershipRole


class GroupCreate(APIModel):
    """Group creation request."""

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class GroupUpdate(APIModel):
    """Partial group update; omitted fields keep their value."""

    name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class GroupJoinRequest(APIModel):
    invite_code: str = ""


class GroupResponse(APIModel):
    """Group response model."""

    id: UUID
    name: str
    description: Optional[str] = None
    invite_code: str
    created_by: Optional[UUID] = None
    created_at: datetime


class GroupSummary(GroupResponse):
    """A group as seen by one of its members."""

    role: MembershipRole
    member_count: int
    recipe_count: int
    joined_at: datetime


class GroupMember(APIModel):
    id: UUID
    display_name: str
    avatar_url: Optional[str] = None
    role: MembershipRole
    joined_at: datetime


class GroupDetail(GroupResponse):
    """Group metadata with the caller's role and the full roster."""

    role: MembershipRole
    members: list[GroupMember]


class InviteCodeResponse(APIModel):
    invite_code: str
