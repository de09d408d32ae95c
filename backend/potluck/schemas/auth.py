from pydantic import EmailStr, Field

from .common import APIModel
from .user import UserResponse


class UserRegister(APIModel):
    """User registration request."""

    email: EmailStr
    password: str = Field(min_length=1)
    display_name: str = Field(min_length=1, max_length=100)


class UserLogin(APIModel):
    """User login request."""

    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(APIModel):
    """Session token plus the user it belongs to."""

    token: str
    token_type: str = "bearer"
    user: UserResponse
