"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

import re
from typing import TypeVar, Generic, Optional

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import DuplicateRecordError


T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

_KEY_DETAIL_RE = re.compile(r"Key \((\w+)\)=")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - Translation of unique-constraint failures into DuplicateRecordError

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[UserRecord]):
            def find_by_id(self, user_id: int) -> Optional[UserRecord]:
                result = self._db.table("users").select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _raise_if_duplicate(self, error: APIError, table: str) -> None:
        """
        Re-raise a unique violation as DuplicateRecordError.

        Returns normally for any other API error so the caller can re-raise it.
        """
        if error.code != UNIQUE_VIOLATION:
            return
        raise DuplicateRecordError(table, self._violated_column(error, table)) from error

    @staticmethod
    def _violated_column(error: APIError, table: str) -> Optional[str]:
        """Find the column named in a unique violation, if Postgres reported one."""
        match = _KEY_DETAIL_RE.search(error.details or "")
        if match:
            return match.group(1)

        match = re.search(rf'"{table}_(\w+)_key"', error.message or "")
        if match:
            return match.group(1)
        return None
