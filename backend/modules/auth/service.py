"""
Authentication service implementation.

Registration, login, logout and refresh-token rotation on top of the
credential store and the password hasher.
"""

import asyncio
import logging
from typing import Optional

from shared.exceptions import DuplicateRecordError
from modules.users.models import UserProfile

from .interfaces import IAuthService
from .models import AuthSession, LoginRequest, RegisterRequest
from .passwords import PasswordHasher
from .repository import AuthRepository
from .exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UserExistsError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    The repository and hasher are synchronous; every call into them runs in
    a worker thread so the event loop is never blocked by bcrypt or I/O.
    """

    def __init__(self, repository: AuthRepository, hasher: PasswordHasher):
        self._repository = repository
        self._hasher = hasher

    async def register(self, request: RegisterRequest) -> UserProfile:
        """
        Create a customer account.

        All three uniqueness lookups run concurrently and all of them
        complete before any conflict is reported.
        """
        by_email, by_name, by_phone = await asyncio.gather(
            asyncio.to_thread(self._repository.find_by_email, request.email),
            asyncio.to_thread(self._repository.find_by_name, request.name),
            asyncio.to_thread(self._repository.find_by_phone, request.phone),
        )

        if by_email is not None:
            raise UserExistsError("email")
        if by_name is not None:
            raise UserExistsError("name")
        if by_phone is not None:
            raise UserExistsError("phone")

        password_hash = await asyncio.to_thread(self._hasher.hash, request.password)

        # The lookups above can race with another registration; the unique
        # constraints decide, and a losing insert is still a conflict.
        try:
            record = await asyncio.to_thread(
                self._repository.create_user, request, password_hash
            )
        except DuplicateRecordError as e:
            raise UserExistsError(e.column) from e

        logger.info("Registered user %s", record.id)
        return record.to_profile()

    async def login(self, request: LoginRequest) -> AuthSession:
        """Check credentials and open a session."""
        record = await asyncio.to_thread(self._repository.find_by_email, request.email)
        if record is None:
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, request.password, record.password)
        if not matches:
            raise InvalidCredentialsError()

        refresh_token = await asyncio.to_thread(self._repository.create_refresh_token, record.id)
        return AuthSession(user=record.to_profile(), refresh_token=refresh_token)

    async def logout(self, refresh_token: Optional[str]) -> None:
        """Close a session by deleting its refresh token."""
        if not refresh_token:
            raise InvalidTokenError("Refresh token is missing.")

        deleted = await asyncio.to_thread(self._repository.delete_refresh_token, refresh_token)
        if not deleted:
            raise InvalidTokenError("Refresh token is not valid.")

    async def refresh(self, refresh_token: Optional[str]) -> AuthSession:
        """Rotate a refresh token and return the owner with a new one."""
        if not refresh_token:
            raise InvalidTokenError("Refresh Token is required.")

        old = await asyncio.to_thread(self._repository.find_valid_refresh_token, refresh_token)
        if old is None:
            raise InvalidTokenError("Invalid or expired refresh token.")

        # Only the caller whose delete removed the row may redeem it
        deleted = await asyncio.to_thread(self._repository.delete_refresh_token, refresh_token)
        if not deleted:
            raise InvalidTokenError("Invalid or expired refresh token.")

        record = await asyncio.to_thread(self._repository.find_by_id, old.user_id)
        if record is None:
            raise InvalidTokenError("User associated with token not found.")

        new_token = await asyncio.to_thread(self._repository.create_refresh_token, record.id)
        return AuthSession(user=record.to_profile(), refresh_token=new_token)
