"""
Authentication module exceptions.

These exceptions are raised by the auth services and caught by the route
handlers, which translate them into HTTP status codes.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ConflictError


REGISTRATION_CONFLICT_MESSAGES = {
    "email": "User with this email already exists.",
    "name": "User with this username already exists.",
    "phone": "User with this phone number already exists.",
}


class UserExistsError(ConflictError):
    """Raised when a name, email or phone number is already taken."""

    def __init__(self, field: Optional[str] = None, message: Optional[str] = None):
        if message is None:
            message = REGISTRATION_CONFLICT_MESSAGES.get(field or "", "User already exists.")
        super().__init__(message, code="USER_EXISTS", details={"field": field})
        self.field = field


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when a password does not match.

    Login uses the same message for unknown emails so callers cannot tell
    which half of the pair was wrong.
    """

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Raised when a token is missing, unknown, malformed or badly signed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(InvalidTokenError):
    """Raised when an access token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message)
        self.code = "TOKEN_EXPIRED"
