"""Security utilities: password hashing and JWT access tokens."""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


# --- Password Hashing ---

def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


# --- JWT Tokens ---

def create_access_token(
    subject: str,
    secret_key: str,
    expires_minutes: int,
    algorithm: str = "HS256",
) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": subject,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_jwt_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict:
    """Decode and validate a JWT token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(
        token,
        secret_key,
        algorithms=[algorithm],
        options={"require": ["exp", "sub"]},
    )
