"""
User profile service implementation.
"""

import asyncio

from shared.exceptions import DuplicateRecordError
from modules.auth.exceptions import InvalidCredentialsError, UserExistsError
from modules.auth.passwords import PasswordHasher

from .interfaces import IUserService
from .models import UserProfile, UpdateProfileRequest
from .repository import UserRepository
from .exceptions import UserNotFoundError

PROFILE_CONFLICT_MESSAGES = {
    "email": "User with this email already exists.",
    "name": "User with this name already exists.",
    "phone": "User with this phone already exists.",
}


class UserService(IUserService):
    """
    Profile operations for the authenticated user.

    Repository calls are synchronous and run in worker threads.
    """

    def __init__(self, repository: UserRepository, hasher: PasswordHasher):
        self._repository = repository
        self._hasher = hasher

    async def get_profile(self, user_id: int) -> UserProfile:
        """Get the profile of a user."""
        record = await asyncio.to_thread(self._repository.find_by_id, user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return record.to_profile()

    async def update_profile(
        self,
        user_id: int,
        updates: UpdateProfileRequest,
    ) -> UserProfile:
        """Update name, email and/or phone, keeping each unique."""
        current = await asyncio.to_thread(self._repository.find_by_id, user_id)
        if current is None:
            raise UserNotFoundError(user_id)

        lookups = {
            "email": self._repository.find_by_email,
            "name": self._repository.find_by_name,
            "phone": self._repository.find_by_phone,
        }

        changes: dict[str, str] = {}
        for field, find in lookups.items():
            value = getattr(updates, field)
            if not value or value == getattr(current, field):
                continue
            owner = await asyncio.to_thread(find, value)
            if owner is not None and owner.id != user_id:
                raise UserExistsError(field, PROFILE_CONFLICT_MESSAGES[field])
            changes[field] = value

        if not changes:
            return current.to_profile()

        try:
            updated = await asyncio.to_thread(self._repository.update, user_id, changes)
        except DuplicateRecordError as e:
            raise UserExistsError(
                e.column,
                PROFILE_CONFLICT_MESSAGES.get(e.column or "", "User already exists."),
            ) from e

        if updated is None:
            raise UserNotFoundError(user_id)
        return updated

    async def change_password(
        self,
        user_id: int,
        old_password: str,
        new_password: str,
    ) -> None:
        """Replace a user's password after checking the old one."""
        record = await asyncio.to_thread(self._repository.find_by_id, user_id)
        if record is None:
            raise UserNotFoundError(user_id)

        matches = await asyncio.to_thread(self._hasher.verify, old_password, record.password)
        if not matches:
            raise InvalidCredentialsError("Incorrect old password.")

        new_hash = await asyncio.to_thread(self._hasher.hash, new_password)
        await asyncio.to_thread(self._repository.update_password, user_id, new_hash)
