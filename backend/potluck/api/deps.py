from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from ..core.config import Settings
from ..core.database import get_db
from ..core.errors import AuthenticationError
from ..services.auth import AuthService
from ..services.groups import GroupService
from ..services.recipes import RecipeService

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_group_service(db: Session = Depends(get_db)) -> GroupService:
    return GroupService(db)


def get_recipe_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RecipeService:
    return RecipeService(db, feed_page_size=settings.FEED_PAGE_SIZE)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> UUID:
    """Resolve the bearer token to the authenticated user's id."""
    if credentials is None:
        raise AuthenticationError("No token provided")

    return auth_service.authenticate(credentials.credentials)
