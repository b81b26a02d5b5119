"""
Authentication module interface.

Route handlers depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.users.models import UserProfile

from .models import AuthSession, LoginRequest, RegisterRequest


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for account and session operations.

    Access tokens are not part of this contract; handlers mint them from
    the returned user with the TokenIssuer.
    """

    async def register(self, request: RegisterRequest) -> UserProfile:
        """
        Create a customer account.

        Args:
            request: Name, email, password and phone

        Returns:
            The created user, without the password hash

        Raises:
            UserExistsError: If email, name or phone is taken (checked in that order)
        """
        ...

    async def login(self, request: LoginRequest) -> AuthSession:
        """
        Check credentials and open a session.

        Returns:
            The user and a new refresh token

        Raises:
            InvalidCredentialsError: Unknown email or wrong password, indistinguishably
        """
        ...

    async def logout(self, refresh_token: Optional[str]) -> None:
        """
        Close a session by deleting its refresh token.

        Raises:
            InvalidTokenError: If the token is missing or unknown
        """
        ...

    async def refresh(self, refresh_token: Optional[str]) -> AuthSession:
        """
        Rotate a refresh token.

        The old token is deleted before the new one is issued, so it cannot
        be redeemed twice.

        Raises:
            InvalidTokenError: If the token is missing, unknown, expired,
                or its user no longer exists
        """
        ...
