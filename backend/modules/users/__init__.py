"""
Users module.

Profile read/update and password change for the authenticated user.

Public API:
- IUserService: Interface for profile operations
- UserProfile: Public view of a user
- UserRecord: Stored user row (includes the password hash)
"""

from .interfaces import IUserService
from .models import (
    UserProfile,
    UserRecord,
    UpdateProfileRequest,
    ChangePasswordRequest,
)
from .exceptions import UserNotFoundError

__all__ = [
    "IUserService",
    "UserProfile",
    "UserRecord",
    "UpdateProfileRequest",
    "ChangePasswordRequest",
    "UserNotFoundError",
]
