from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from .deps import get_current_user_id, get_recipe_service, get_settings
from ..core.config import Settings
from ..core.storage import save_upload_file
from ..schemas.common import MessageResponse
from ..schemas.recipe import (
    CommentCreate,
    CommentCreatedResponse,
    RecipeCreatedResponse,
    RecipeDetail,
    RecipeResponse,
)
from ..services.recipes import RecipeService

router = APIRouter()


def _has_file(image: Optional[UploadFile]) -> bool:
    return image is not None and bool(image.filename)


@router.get("", response_model=List[RecipeResponse])
def get_feed(
    user_id: UUID = Depends(get_current_user_id),
    recipes: RecipeService = Depends(get_recipe_service),
):
    """Recipes from all of the caller's groups, newest first."""
    return recipes.get_feed(user_id)


@router.get("/{recipe_id}", response_model=RecipeDetail)
def get_recipe(
    recipe_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    recipes: RecipeService = Depends(get_recipe_service),
):
    return recipes.get_recipe_detail(recipe_id, user_id)


@router.post("", response_model=RecipeCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    title: Optional[str] = Form(None),
    group_id: Optional[str] = Form(None, alias="groupId"),
    source_url: Optional[str] = Form(None, alias="sourceUrl"),
    source_name: Optional[str] = Form(None, alias="sourceName"),
    rating: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    cook_date: Optional[str] = Form(None, alias="cookDate"),
    image: Optional[UploadFile] = File(None),
    user_id: UUID = Depends(get_current_user_id),
    recipes: RecipeService = Depends(get_recipe_service),
    settings: Settings = Depends(get_settings),
):
    """Post a recipe, with an optional photo, to one of the caller's groups."""
    # Reject bad input before anything is written to the blob store
    recipes.check_new_recipe(user_id, title, group_id, rating=rating, cook_date=cook_date)

    image_url = None
    if _has_file(image):
        image_url = await save_upload_file(image, settings)

    recipe = recipes.create_recipe(
        author_id=user_id,
        group_id=group_id,
        title=title,
        source_url=source_url,
        source_name=source_name,
        rating=rating,
        notes=notes,
        cook_date=cook_date,
        image_url=image_url,
    )
    return RecipeCreatedResponse(message="Recipe created successfully", recipe_id=recipe.id)


@router.put("/{recipe_id}", response_model=MessageResponse)
async def update_recipe(
    recipe_id: UUID,
    title: Optional[str] = Form(None),
    source_url: Optional[str] = Form(None, alias="sourceUrl"),
    source_name: Optional[str] = Form(None, alias="sourceName"),
    rating: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    cook_date: Optional[str] = Form(None, alias="cookDate"),
    image: Optional[UploadFile] = File(None),
    user_id: UUID = Depends(get_current_user_id),
    recipes: RecipeService = Depends(get_recipe_service),
    settings: Settings = Depends(get_settings),
):
    """Edit one of the caller's own recipes; omitted fields stay as they are."""
    recipes.check_recipe_update(recipe_id, user_id, rating=rating, cook_date=cook_date)

    image_url = None
    if _has_file(image):
        image_url = await save_upload_file(image, settings)

    recipes.update_recipe(
        recipe_id,
        user_id,
        title=title,
        source_url=source_url,
        source_name=source_name,
        rating=rating,
        notes=notes,
        cook_date=cook_date,
        image_url=image_url,
    )
    return MessageResponse(message="Recipe updated successfully")


@router.delete("/{recipe_id}", response_model=MessageResponse)
def delete_recipe(
    recipe_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    recipes: RecipeService = Depends(get_recipe_service),
):
    recipes.delete_recipe(recipe_id, user_id)
    return MessageResponse(message="Recipe deleted successfully")


@router.post(
    "/{recipe_id}/comments",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    recipe_id: UUID,
    comment_data: CommentCreate,
    user_id: UUID = Depends(get_current_user_id),
    recipes: RecipeService = Depends(get_recipe_service),
):
    comment = recipes.add_comment(recipe_id, user_id, comment_data.content)
    return CommentCreatedResponse(message="Comment added successfully", comment_id=comment.id)
