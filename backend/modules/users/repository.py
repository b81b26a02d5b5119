"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the users table.
"""

from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .models import UserProfile, UserRecord

USERS_TABLE = "users"


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user data access.

    Lookups return full UserRecord rows (password hash included); callers
    decide what to expose.

    Note: This repository does NOT enforce uniqueness beyond what the
    database constraints do. Duplicate writes surface as DuplicateRecordError.
    """

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        """Find a user by ID."""
        return self._find_one("id", user_id)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Find a user by email."""
        return self._find_one("email", email)

    def find_by_name(self, name: str) -> Optional[UserRecord]:
        """Find a user by name."""
        return self._find_one("name", name)

    def find_by_phone(self, phone: str) -> Optional[UserRecord]:
        """Find a user by phone number."""
        return self._find_one("phone", phone)

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update(self, user_id: int, updates: dict[str, Any]) -> Optional[UserProfile]:
        """
        Update profile fields (name, email, phone) of a user.

        Args:
            user_id: The user ID.
            updates: Column values to set. Other keys are ignored.

        Returns:
            The updated profile, or None if the user does not exist.

        Raises:
            DuplicateRecordError: If a new value collides with another user.
        """
        data = {
            key: value
            for key, value in updates.items()
            if key in ("name", "email", "phone") and value is not None
        }
        if not data:
            record = self.find_by_id(user_id)
            return record.to_profile() if record else None

        try:
            result = self._db.table(USERS_TABLE).update(data).eq("id", user_id).execute()
        except APIError as e:
            self._raise_if_duplicate(e, USERS_TABLE)
            raise

        if not result.data:
            return None
        return self._map_to_user(result.data[0]).to_profile()

    def update_password(self, user_id: int, password_hash: str) -> None:
        """Replace the stored password hash of a user."""
        self._db.table(USERS_TABLE).update({"password": password_hash}).eq("id", user_id).execute()

    def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        self._db.table(USERS_TABLE).select("id").limit(1).execute()

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _find_one(self, column: str, value: Any) -> Optional[UserRecord]:
        result = self._db.table(USERS_TABLE).select("*").eq(column, value).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            password=data["password"],
            role=data.get("role") or "customer",
            phone=data["phone"],
        )
