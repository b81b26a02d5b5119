"""
Authentication module.

Handles registration, login, logout, refresh-token rotation, password
hashing, access token issuance and the cookie/bearer session transport.

Public API:
- IAuthService: Interface for account and session operations
- TokenIssuer: Access token signing and verification
- PasswordHasher: bcrypt hashing
- Auth exceptions: UserExistsError, InvalidCredentialsError, InvalidTokenError, ...
"""

from .interfaces import IAuthService
from .models import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRecord,
    AuthSession,
    TokenPair,
)
from .passwords import PasswordHasher
from .tokens import TokenIssuer, generate_refresh_token
from .exceptions import (
    UserExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
    ExpiredTokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "RegisterRequest",
    "LoginRequest",
    "RefreshTokenRecord",
    "AuthSession",
    "TokenPair",
    # Collaborators
    "PasswordHasher",
    "TokenIssuer",
    "generate_refresh_token",
    # Exceptions
    "UserExistsError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "ExpiredTokenError",
]
