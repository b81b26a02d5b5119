"""
Users module exceptions.
"""

from shared.exceptions import NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when the user behind a valid access token no longer exists."""

    def __init__(self, user_id: int):
        super().__init__(
            "User is not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )
