from datetime import datetime
from uuid import UUID
from typing import Optional

from .common import APIModel


class UserResponse(APIModel):
    """User response model."""

    id: UUID
    email: str
    display_name: str
    avatar_url: Optional[str] = None
    created_at: datetime
