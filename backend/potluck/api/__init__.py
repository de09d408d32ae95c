from fastapi import APIRouter

from .auth import router as auth_router
from .groups import router as groups_router
from .recipes import router as recipes_router


def build_api_router(prefix: str = "/api") -> APIRouter:
    api_router = APIRouter(prefix=prefix)

    api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])
    api_router.include_router(groups_router, prefix="/groups", tags=["groups"])
    api_router.include_router(recipes_router, prefix="/recipes", tags=["recipes"])
    return api_router
