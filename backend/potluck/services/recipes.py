"""Recipes and their comments, scoped by group membership."""

import logging
from datetime import date
from typing import Optional, Union
from uuid import UUID

from sqlmodel import Session, select

from ..core.errors import AuthorizationError, NotFoundError, ValidationError
from ..models.comment import Comment
from ..models.group import Group
from ..models.membership import Membership
from ..models.recipe import Recipe
from ..models.user import User
from ..schemas.recipe import (
    AuthorRef,
    CommentResponse,
    GroupRef,
    RecipeDetail,
    RecipeResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_FEED_PAGE_SIZE = 50


def parse_rating(value: Union[int, str, None]) -> Optional[int]:
    """Accept an integer 1-5 (or its string form); empty means no rating."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError("Rating must be an integer between 1 and 5")
    try:
        rating = int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ValidationError("Rating must be an integer between 1 and 5")
    if isinstance(value, float) and value != rating:
        raise ValidationError("Rating must be an integer between 1 and 5")
    if not 1 <= rating <= 5:
        raise ValidationError("Rating must be an integer between 1 and 5")
    return rating


def parse_cook_date(value: Union[date, str, None]) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Cook date must be in YYYY-MM-DD format")


def parse_uuid(value: Union[UUID, str, None], label: str) -> Optional[UUID]:
    if value is None or isinstance(value, UUID):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}")


def _author(user: User) -> AuthorRef:
    return AuthorRef(id=user.id, name=user.display_name, avatar_url=user.avatar_url)


def _recipe_fields(recipe: Recipe, author: User, group: Group) -> dict:
    return {
        "id": recipe.id,
        "title": recipe.title,
        "source_url": recipe.source_url,
        "source_name": recipe.source_name,
        "image_url": recipe.image_url,
        "rating": recipe.rating,
        "notes": recipe.notes,
        "cook_date": recipe.cook_date,
        "created_at": recipe.created_at,
        "author": _author(author),
        "group": GroupRef(id=group.id, name=group.name),
    }


class RecipeService:
    def __init__(self, db: Session, feed_page_size: int = DEFAULT_FEED_PAGE_SIZE):
        self.db = db
        self.feed_page_size = feed_page_size

    def is_member(self, user_id: UUID, group_id: UUID) -> bool:
        membership = self.db.exec(
            select(Membership.id).where(
                Membership.user_id == user_id,
                Membership.group_id == group_id,
            )
        ).first()
        return membership is not None

    def require_member(self, user_id: UUID, group_id: UUID) -> None:
        if not self.is_member(user_id, group_id):
            raise AuthorizationError("You are not a member of this group")

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        recipe = self.db.get(Recipe, recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    def get_owned_recipe(self, recipe_id: UUID, caller_id: UUID, action: str = "edit") -> Recipe:
        """Fetch a recipe the caller authored; group admins get no override."""
        recipe = self.get_recipe(recipe_id)
        if recipe.user_id != caller_id:
            raise AuthorizationError(f"You can only {action} your own recipes")
        return recipe

    def check_new_recipe(
        self,
        author_id: UUID,
        title: Optional[str],
        group_id: Union[UUID, str, None],
        rating: Union[int, str, None] = None,
        cook_date: Union[date, str, None] = None,
    ) -> UUID:
        """Validate every field and the membership before anything is stored."""
        group_uuid = parse_uuid(group_id, "group id")
        if not (title or "").strip() or group_uuid is None:
            raise ValidationError("Title and group are required")
        parse_rating(rating)
        parse_cook_date(cook_date)
        self.require_member(author_id, group_uuid)
        return group_uuid

    def check_recipe_update(
        self,
        recipe_id: UUID,
        caller_id: UUID,
        rating: Union[int, str, None] = None,
        cook_date: Union[date, str, None] = None,
    ) -> Recipe:
        """Ownership and field checks for an edit, run before any upload is kept."""
        recipe = self.get_owned_recipe(recipe_id, caller_id)
        parse_rating(rating)
        parse_cook_date(cook_date)
        return recipe

    def create_recipe(
        self,
        author_id: UUID,
        group_id: Union[UUID, str, None],
        title: Optional[str],
        source_url: Optional[str] = None,
        source_name: Optional[str] = None,
        rating: Union[int, str, None] = None,
        notes: Optional[str] = None,
        cook_date: Union[date, str, None] = None,
        image_url: Optional[str] = None,
    ) -> Recipe:
        group_uuid = self.check_new_recipe(author_id, title, group_id, rating, cook_date)

        recipe = Recipe(
            user_id=author_id,
            group_id=group_uuid,
            title=title.strip(),
            source_url=source_url or None,
            source_name=source_name or None,
            image_url=image_url,
            rating=parse_rating(rating),
            notes=notes or None,
            cook_date=parse_cook_date(cook_date),
        )
        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)

        logger.info(f"User {author_id} posted recipe {recipe.id} to group {group_uuid}")
        return recipe

    def get_feed(self, user_id: UUID) -> list[RecipeResponse]:
        """Newest recipes across every group the user belongs to."""
        rows = self.db.exec(
            select(Recipe, User, Group)
            .join(User, Recipe.user_id == User.id)
            .join(Group, Recipe.group_id == Group.id)
            .join(Membership, Membership.group_id == Recipe.group_id)
            .where(Membership.user_id == user_id)
            .order_by(Recipe.created_at.desc())
            .limit(self.feed_page_size)
        ).all()

        return [
            RecipeResponse(**_recipe_fields(recipe, author, group))
            for recipe, author, group in rows
        ]

    def get_recipe_detail(self, recipe_id: UUID, caller_id: UUID) -> RecipeDetail:
        row = self.db.exec(
            select(Recipe, User, Group)
            .join(User, Recipe.user_id == User.id)
            .join(Group, Recipe.group_id == Group.id)
            .where(Recipe.id == recipe_id)
        ).first()
        if not row:
            raise NotFoundError("Recipe not found")

        recipe, author, group = row
        self.require_member(caller_id, recipe.group_id)

        comment_rows = self.db.exec(
            select(Comment, User)
            .join(User, Comment.user_id == User.id)
            .where(Comment.recipe_id == recipe_id)
            .order_by(Comment.created_at.asc())
        ).all()

        comments = [
            CommentResponse(
                id=comment.id,
                content=comment.content,
                created_at=comment.created_at,
                author=_author(commenter),
            )
            for comment, commenter in comment_rows
        ]

        return RecipeDetail(**_recipe_fields(recipe, author, group), comments=comments)

    def update_recipe(
        self,
        recipe_id: UUID,
        caller_id: UUID,
        title: Optional[str] = None,
        source_url: Optional[str] = None,
        source_name: Optional[str] = None,
        rating: Union[int, str, None] = None,
        notes: Optional[str] = None,
        cook_date: Union[date, str, None] = None,
        image_url: Optional[str] = None,
    ) -> Recipe:
        """
        Partial update by the recipe's author.

        None leaves a field unchanged. An empty string clears the optional
        text fields and the cook date; an empty title or rating is ignored.
        """
        recipe = self.get_owned_recipe(recipe_id, caller_id)

        if title is not None and title.strip():
            recipe.title = title.strip()

        for field_name, value in (
            ("source_url", source_url),
            ("source_name", source_name),
            ("notes", notes),
        ):
            if value is not None:
                setattr(recipe, field_name, value or None)

        new_rating = parse_rating(rating)
        if new_rating is not None:
            recipe.rating = new_rating

        if cook_date is not None:
            recipe.cook_date = parse_cook_date(cook_date)

        if image_url is not None:
            recipe.image_url = image_url

        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)

        logger.info(f"User {caller_id} updated recipe {recipe_id}")
        return recipe

    def delete_recipe(self, recipe_id: UUID, caller_id: UUID) -> None:
        recipe = self.get_owned_recipe(recipe_id, caller_id, action="delete")
        self.db.delete(recipe)
        self.db.commit()
        logger.info(f"User {caller_id} deleted recipe {recipe_id}")

    def add_comment(self, recipe_id: UUID, author_id: UUID, content: Optional[str]) -> Comment:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content is required")

        recipe = self.get_recipe(recipe_id)
        self.require_member(author_id, recipe.group_id)

        comment = Comment(recipe_id=recipe_id, user_id=author_id, content=content)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        logger.info(f"User {author_id} commented on recipe {recipe_id}")
        return comment
