"""
Group and membership registry.

Invite codes act as capability tokens: anyone holding a code may join its
group. Admins manage group settings and the code itself, and a group always
keeps at least one admin while it has members.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from ..core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PolicyError,
    ValidationError,
)
from ..models.group import Group, generate_invite_code
from ..models.membership import Membership, MembershipRole
from ..models.recipe import Recipe
from ..models.user import User
from ..schemas.group import GroupDetail, GroupMember, GroupSummary

logger = logging.getLogger(__name__)


def _group_fields(group: Group) -> dict:
    return {
        "id": group.id,
        "name": group.name,
        "description": group.description,
        "invite_code": group.invite_code,
        "created_by": group.created_by,
        "created_at": group.created_at,
    }


class GroupService:
    def __init__(self, db: Session):
        self.db = db

    def get_membership(self, user_id: UUID, group_id: UUID) -> Optional[Membership]:
        return self.db.exec(
            select(Membership).where(
                Membership.user_id == user_id,
                Membership.group_id == group_id,
            )
        ).first()

    def require_user(self, user_id: UUID) -> User:
        """The caller's token may outlive their account."""
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def require_admin(self, user_id: UUID, group_id: UUID, action: str) -> Membership:
        membership = self.get_membership(user_id, group_id)
        if not membership or membership.role != MembershipRole.ADMIN:
            raise AuthorizationError(f"Only admins can {action}")
        return membership

    def _count_by_group(self, column, group_ids: list[UUID]) -> dict[UUID, int]:
        """Row counts of a table keyed by its group_id column."""
        if not group_ids:
            return {}
        rows = self.db.exec(
            select(column, func.count()).where(column.in_(group_ids)).group_by(column)
        ).all()
        return {group_id: count for group_id, count in rows}

    def _summaries(self, pairs: list[tuple[Group, Membership]]) -> list[GroupSummary]:
        group_ids = [group.id for group, _ in pairs]
        member_counts = self._count_by_group(Membership.group_id, group_ids)
        recipe_counts = self._count_by_group(Recipe.group_id, group_ids)

        return [
            GroupSummary(
                **_group_fields(group),
                role=membership.role,
                member_count=member_counts.get(group.id, 0),
                recipe_count=recipe_counts.get(group.id, 0),
                joined_at=membership.joined_at,
            )
            for group, membership in pairs
        ]

    def create_group(
        self, name: str, description: Optional[str], creator_id: UUID
    ) -> GroupSummary:
        """Create a group and make its creator the first admin."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required")
        self.require_user(creator_id)

        group = Group(
            name=name,
            description=description or None,
            invite_code=generate_invite_code(),
            created_by=creator_id,
        )
        self.db.add(group)
        self.db.flush()

        membership = Membership(
            user_id=creator_id,
            group_id=group.id,
            role=MembershipRole.ADMIN,
        )
        self.db.add(membership)
        self.db.commit()
        self.db.refresh(group)
        self.db.refresh(membership)

        logger.info(f"User {creator_id} created group {group.id}")
        return self._summaries([(group, membership)])[0]

    def join_group(self, invite_code: str, user_id: UUID) -> GroupSummary:
        code = (invite_code or "").strip().upper()
        if not code:
            raise ValidationError("Invite code is required")

        group = self.db.exec(select(Group).where(Group.invite_code == code)).first()
        if not group:
            raise NotFoundError("Invalid invite code")
        self.require_user(user_id)

        membership = Membership(
            user_id=user_id,
            group_id=group.id,
            role=MembershipRole.MEMBER,
        )
        self.db.add(membership)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("You are already a member of this group")
        self.db.refresh(group)
        self.db.refresh(membership)

        logger.info(f"User {user_id} joined group {group.id}")
        return self._summaries([(group, membership)])[0]

    def leave_group(self, user_id: UUID, group_id: UUID) -> None:
        membership = self.get_membership(user_id, group_id)
        if not membership:
            raise NotFoundError("You are not a member of this group")

        if membership.role == MembershipRole.ADMIN:
            admin_count = self.db.exec(
                select(func.count(Membership.id)).where(
                    Membership.group_id == group_id,
                    Membership.role == MembershipRole.ADMIN,
                )
            ).one()
            if admin_count == 1:
                logger.warning(f"Refused leave of last admin {user_id} from group {group_id}")
                raise PolicyError(
                    "Cannot leave group as the only admin. "
                    "Transfer admin role first or delete the group."
                )

        self.db.delete(membership)
        self.db.commit()
        logger.info(f"User {user_id} left group {group_id}")

    def update_group(
        self,
        group_id: UUID,
        caller_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Group:
        """Admin-only partial update: None means keep the stored value."""
        self.require_admin(caller_id, group_id, "update group settings")

        group = self.db.get(Group, group_id)
        if not group:
            raise NotFoundError("Group not found")

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Group name cannot be empty")
            group.name = name
        if description is not None:
            group.description = description

        self.db.add(group)
        self.db.commit()
        self.db.refresh(group)

        logger.info(f"User {caller_id} updated group {group_id}")
        return group

    def regenerate_invite_code(self, group_id: UUID, caller_id: UUID) -> str:
        self.require_admin(caller_id, group_id, "regenerate invite codes")

        group = self.db.get(Group, group_id)
        if not group:
            raise NotFoundError("Group not found")

        group.invite_code = generate_invite_code()
        self.db.add(group)
        self.db.commit()

        logger.info(f"User {caller_id} regenerated invite code of group {group_id}")
        return group.invite_code

    def list_groups_for_user(self, user_id: UUID) -> list[GroupSummary]:
        """Groups of a user, most recently joined first."""
        pairs = self.db.exec(
            select(Group, Membership)
            .join(Membership, Membership.group_id == Group.id)
            .where(Membership.user_id == user_id)
            .order_by(Membership.joined_at.desc())
        ).all()
        return self._summaries(list(pairs))

    def get_group_detail(self, group_id: UUID, caller_id: UUID) -> GroupDetail:
        group = self.db.get(Group, group_id)
        if not group:
            raise NotFoundError("Group not found")

        membership = self.get_membership(caller_id, group_id)
        if not membership:
            raise AuthorizationError("You are not a member of this group")

        rows = self.db.exec(
            select(User, Membership)
            .join(Membership, Membership.user_id == User.id)
            .where(Membership.group_id == group_id)
            .order_by(Membership.joined_at.asc())
        ).all()

        members = [
            GroupMember(
                id=user.id,
                display_name=user.display_name,
                avatar_url=user.avatar_url,
                role=member.role,
                joined_at=member.joined_at,
            )
            for user, member in rows
        ]

        return GroupDetail(**_group_fields(group), role=membership.role, members=members)
