"""
Users module interface.

Route handlers depend on IUserService, not the concrete implementation.
"""

from typing import Protocol, runtime_checkable

from .models import UserProfile, UpdateProfileRequest


@runtime_checkable
class IUserService(Protocol):
    """Interface for profile operations on the current user."""

    async def get_profile(self, user_id: int) -> UserProfile:
        """
        Get the profile of a user.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...

    async def update_profile(
        self,
        user_id: int,
        updates: UpdateProfileRequest,
    ) -> UserProfile:
        """
        Update name, email and/or phone of a user.

        Only fields that are provided and differ from the stored values
        are checked and written.

        Raises:
            UserNotFoundError: If the user does not exist
            UserExistsError: If a new value belongs to another user
        """
        ...

    async def change_password(
        self,
        user_id: int,
        old_password: str,
        new_password: str,
    ) -> None:
        """
        Replace a user's password after checking the old one.

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidCredentialsError: If old_password does not match
        """
        ...
