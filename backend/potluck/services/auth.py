"""Registration, login and token verification."""

import logging
from uuid import UUID

import jwt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.config import Settings
from ..core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..core.security import (
    MAX_PASSWORD_BYTES,
    create_access_token,
    decode_jwt_token,
    get_password_hash,
    verify_password,
)
from ..models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def issue_token(self, user: User) -> str:
        return create_access_token(
            subject=str(user.id),
            secret_key=self.settings.SECRET_KEY,
            expires_minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            algorithm=self.settings.JWT_ALGORITHM,
        )

    def register(self, email: str, password: str, display_name: str) -> tuple[User, str]:
        """Create a user and return it with a fresh session token."""
        email = (email or "").strip()
        display_name = (display_name or "").strip()
        if not email or not password or not display_name:
            raise ValidationError("Email, password, and display name are required")
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            display_name=display_name,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered")
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user, self.issue_token(user)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials; the same error covers unknown email and wrong password."""
        user = self.db.exec(select(User).where(User.email == (email or "").strip())).first()
        if not user or not verify_password(password or "", user.hashed_password):
            raise AuthenticationError("Invalid credentials")

        return user, self.issue_token(user)

    def authenticate(self, token: str) -> UUID:
        """Validate signature and expiry, returning the embedded user id."""
        try:
            payload = decode_jwt_token(
                token, self.settings.SECRET_KEY, self.settings.JWT_ALGORITHM
            )
        except jwt.PyJWTError:
            raise AuthenticationError("Invalid or expired token")

        if payload.get("type") != "access":
            raise AuthenticationError("Invalid token type")

        try:
            return UUID(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid user ID format")

    def get_user(self, user_id: UUID) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
