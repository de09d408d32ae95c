"""
Unit tests for SQLModel database models and their constraints.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from potluck.models import (
    User,
    Group,
    Membership,
    MembershipRole,
    Recipe,
    Comment,
    generate_invite_code,
)


@pytest.fixture
def owner(db_session):
    user = User(
        email="owner@example.com",
        display_name="Group Owner",
        hashed_password="hashed_password",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def group(db_session, owner):
    group = Group(name="Test Group", description="A test group", created_by=owner.id)
    db_session.add(group)
    db_session.commit()
    db_session.refresh(group)
    return group


def test_user_creation(db_session, owner):
    """Test creating a user."""
    assert owner.id is not None
    assert owner.email == "owner@example.com"
    assert owner.avatar_url is None
    assert owner.created_at is not None


def test_user_email_unique(db_session, owner):
    db_session.add(
        User(email="owner@example.com", display_name="Copy", hashed_password="x")
    )

    with pytest.raises(IntegrityError):
        db_session.commit()


def test_group_creation(db_session, group, owner):
    """Test creating a group."""
    assert group.id is not None
    assert group.name == "Test Group"
    assert group.created_by == owner.id
    assert len(group.invite_code) == 8
    assert group.invite_code == group.invite_code.upper()


def test_generate_invite_code():
    codes = {generate_invite_code() for _ in range(100)}

    assert len(codes) == 100
    assert all(len(code) == 8 and code == code.upper() for code in codes)


def test_invite_code_unique(db_session, group, owner):
    db_session.add(Group(name="Clone", invite_code=group.invite_code, created_by=owner.id))

    with pytest.raises(IntegrityError):
        db_session.commit()


def test_membership_creation(db_session, group, owner):
    """Test creating a membership relationship."""
    membership = Membership(user_id=owner.id, group_id=group.id)

    db_session.add(membership)
    db_session.commit()
    db_session.refresh(membership)

    assert membership.id is not None
    assert membership.role == MembershipRole.MEMBER
    assert membership.joined_at is not None


def test_membership_pair_unique(db_session, group, owner):
    db_session.add(Membership(user_id=owner.id, group_id=group.id, role=MembershipRole.ADMIN))
    db_session.commit()
    db_session.add(Membership(user_id=owner.id, group_id=group.id))

    with pytest.raises(IntegrityError):
        db_session.commit()


def test_recipe_rating_check_constraint(db_session, group, owner):
    db_session.add(Recipe(user_id=owner.id, group_id=group.id, title="Too good", rating=7))

    with pytest.raises(IntegrityError):
        db_session.commit()


def test_comment_creation(db_session, group, owner):
    """Test creating a comment."""
    recipe = Recipe(user_id=owner.id, group_id=group.id, title="Soup", rating=4)
    db_session.add(recipe)
    db_session.commit()
    db_session.refresh(recipe)

    comment = Comment(recipe_id=recipe.id, user_id=owner.id, content="This is a test comment!")
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)

    assert comment.id is not None
    assert comment.recipe_id == recipe.id
    assert comment.content == "This is a test comment!"


def test_deleting_group_cascades(db_session, group, owner):
    group_id = group.id
    db_session.add(Membership(user_id=owner.id, group_id=group_id, role=MembershipRole.ADMIN))
    recipe = Recipe(user_id=owner.id, group_id=group_id, title="Soup")
    db_session.add(recipe)
    db_session.commit()
    db_session.add(Comment(recipe_id=recipe.id, user_id=owner.id, content="Yum"))
    db_session.commit()

    db_session.delete(group)
    db_session.commit()
    db_session.expunge_all()

    assert db_session.exec(select(Membership)).all() == []
    assert db_session.exec(select(Recipe)).all() == []
    assert db_session.exec(select(Comment)).all() == []


def test_deleting_user_cascades_and_keeps_group(db_session, group, owner):
    group_id = group.id
    db_session.add(Membership(user_id=owner.id, group_id=group_id, role=MembershipRole.ADMIN))
    db_session.add(Recipe(user_id=owner.id, group_id=group_id, title="Soup"))
    db_session.commit()

    db_session.delete(owner)
    db_session.commit()
    db_session.expunge_all()

    remaining = db_session.get(Group, group_id)
    assert remaining is not None
    assert remaining.created_by is None
    assert db_session.exec(select(Membership)).all() == []
    assert db_session.exec(select(Recipe)).all() == []
