from uuid import UUID

from fastapi import APIRouter, Depends, status

from .deps import get_auth_service, get_current_user_id
from ..schemas.auth import AuthResponse, UserLogin, UserRegister
from ..schemas.user import UserResponse
from ..services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user and sign them in."""
    user, token = auth_service.register(
        email=user_data.email,
        password=user_data.password,
        display_name=user_data.display_name,
    )
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    user_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login user and return a bearer token."""
    user, token = auth_service.login(user_data.email, user_data.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    user_id: UUID = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get current user information."""
    return auth_service.get_user(user_id)
