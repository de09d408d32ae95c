"""
SQLModel models for the Potluck application.

This module exports all database models so that importing the package
registers every table with SQLModel metadata.
"""

from .user import User
from .group import Group, generate_invite_code
from .membership import Membership, MembershipRole
from .recipe import Recipe
from .comment import Comment

__all__ = [
    "User",
    "Group",
    "generate_invite_code",
    "Membership",
    "MembershipRole",
    "Recipe",
    "Comment",
]
