from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from .deps import get_current_user_id, get_group_service
from ..schemas.common import MessageResponse
from ..schemas.group import (
    GroupCreate,
    GroupDetail,
    GroupJoinRequest,
    GroupResponse,
    GroupSummary,
    GroupUpdate,
    InviteCodeResponse,
)
from ..services.groups import GroupService

router = APIRouter()


@router.get("", response_model=List[GroupSummary])
def list_groups(
    user_id: UUID = Depends(get_current_user_id),
    groups: GroupService = Depends(get_group_service),
):
    """List the caller's groups, most recently joined first."""
    return groups.list_groups_for_user(user_id)


@router.post("", response_model=GroupSummary, status_code=status.HTTP_201_CREATED)
def create_group(
    group_data: GroupCreate,
    user_id: UUID = Depends(get_current_user_id),
    groups: GroupService = Depends(get_group_service),
):
    """Create a new group with the caller as admin."""
    return groups.create_group(group_data.name, group_data.description, user_id)


@router.post("/join", response_model=GroupSummary)
def join_group(
    join_data: GroupJoinRequest,
    user_id: UUID = Depends(get_current_user_id),
    groups: GroupService = Depends(get_group_service),
):
    """Join a group with an invite code."""
    return groups.join_group(join_data.invite_code, user_id)


@router.get("/{group_id}", response_model=GroupDetail)
def get_group(
    group_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    groups: GroupService = Depends(get_group_service),
):
    """Get group information with its members."""
    return groups.get_group_detail(group_id, user_id)


@router.put("/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: UUID,
    group_data: GroupUpdate,
    user_id: UUID = Depends(get_current_user_id),
    groups: GroupService = Depends(get_group_service),
):
    group = groups.update_group(
        group_id, user_id, name=group_data.name, description=group_data.description
    )
    return GroupResponse.model_validate(group)


@router.post("/{group_id}/leave", response_model=MessageResponse)
def leave_group(
    group_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    groups: GroupService = Depends(get_group_service),
):
    groups.leave_group(user_id, group_id)
    return MessageResponse(message="Successfully left the group")


@router.post("/{group_id}/regenerate-invite", response_model=InviteCodeResponse)
def regenerate_invite(
    group_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    groups: GroupService = Depends(get_group_service),
):
    """Replace the group's invite code; the old one stops working."""
    return InviteCodeResponse(invite_code=groups.regenerate_invite_code(group_id, user_id))
