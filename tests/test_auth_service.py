import jwt
import pytest

from potluck.core.config import Settings
from potluck.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from potluck.core.security import create_access_token
from potluck.services.auth import AuthService


def test_register_issues_working_token(auth_service):
    """A fresh registration authenticates as the new user."""
    user, token = auth_service.register("cook@example.com", "pa55word", "Cook")

    assert user.id is not None
    assert user.hashed_password != "pa55word"
    assert auth_service.authenticate(token) == user.id


def test_register_duplicate_email(auth_service):
    auth_service.register("cook@example.com", "pa55word", "Cook")

    with pytest.raises(ConflictError):
        auth_service.register("cook@example.com", "other", "Someone Else")


@pytest.mark.parametrize(
    "email,password,name",
    [
        ("", "pa55word", "Cook"),
        ("cook@example.com", "", "Cook"),
        ("cook@example.com", "pa55word", "   "),
    ],
)
def test_register_requires_all_fields(auth_service, email, password, name):
    with pytest.raises(ValidationError):
        auth_service.register(email, password, name)


def test_register_rejects_overlong_password(auth_service):
    with pytest.raises(ValidationError):
        auth_service.register("cook@example.com", "x" * 73, "Cook")


def test_login_success(auth_service):
    registered, _ = auth_service.register("cook@example.com", "pa55word", "Cook")

    user, token = auth_service.login("cook@example.com", "pa55word")

    assert user.id == registered.id
    assert auth_service.authenticate(token) == registered.id


def test_login_failures_are_indistinguishable(auth_service):
    auth_service.register("cook@example.com", "pa55word", "Cook")

    with pytest.raises(AuthenticationError) as wrong_password:
        auth_service.login("cook@example.com", "nope")
    with pytest.raises(AuthenticationError) as unknown_email:
        auth_service.login("nobody@example.com", "pa55word")

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.code == unknown_email.value.code


def test_authenticate_rejects_garbage(auth_service):
    with pytest.raises(AuthenticationError):
        auth_service.authenticate("not-a-token")


def test_authenticate_rejects_token_signed_elsewhere(db_session, auth_service):
    user, _ = auth_service.register("cook@example.com", "pa55word", "Cook")
    other = AuthService(db_session, Settings(DATABASE_URL="sqlite://", SECRET_KEY="another-secret"))

    _, foreign_token = other.login("cook@example.com", "pa55word")

    with pytest.raises(AuthenticationError):
        auth_service.authenticate(foreign_token)


def test_authenticate_rejects_expired(auth_service, settings):
    user, _ = auth_service.register("cook@example.com", "pa55word", "Cook")
    expired = create_access_token(str(user.id), settings.SECRET_KEY, expires_minutes=-5)

    with pytest.raises(AuthenticationError):
        auth_service.authenticate(expired)


def test_authenticate_rejects_token_without_expiry(auth_service, settings):
    user, _ = auth_service.register("cook@example.com", "pa55word", "Cook")
    forever = jwt.encode(
        {"sub": str(user.id), "type": "access"}, settings.SECRET_KEY, algorithm="HS256"
    )

    with pytest.raises(AuthenticationError):
        auth_service.authenticate(forever)


def test_authenticate_rejects_non_uuid_subject(auth_service, settings):
    token = create_access_token("42", settings.SECRET_KEY, expires_minutes=5)

    with pytest.raises(AuthenticationError):
        auth_service.authenticate(token)


def test_get_user_missing(auth_service, make_user, db_session):
    user = make_user()
    user_id = user.id
    db_session.delete(user)
    db_session.commit()

    with pytest.raises(NotFoundError):
        auth_service.get_user(user_id)
