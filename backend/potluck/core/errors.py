"""
Error kinds raised by the service layer.

Services raise these instead of HTTPException; the handlers registered in
potluck.main translate them into JSON responses with the matching status.
"""

from fastapi import status


class PotluckError(Exception):
    """Base class for errors that map onto a client-visible response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "SERVER_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PotluckError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class AuthenticationError(PotluckError):
    """Bad credentials or an invalid/expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTHENTICATION_ERROR"
    default_message = "Could not validate credentials"


class AuthorizationError(PotluckError):
    """Authenticated, but not allowed to do this."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "AUTHORIZATION_ERROR"
    default_message = "Access denied"


class NotFoundError(PotluckError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(PotluckError):
    """Duplicate resource or state."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "CONFLICT"
    default_message = "Resource already exists"


class PolicyError(PotluckError):
    """A business rule forbids the requested change."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "POLICY_VIOLATION"
    default_message = "Operation not allowed"


class ServerError(PotluckError):
    pass
