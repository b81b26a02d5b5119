"""
Base exception classes for the Barbershop backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class BarbershopError(Exception):
    """
    Base exception for all Barbershop errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(BarbershopError):
    """Resource not found."""

    pass


class ConflictError(BarbershopError):
    """Resource conflicts with an existing one."""

    pass


class AuthenticationError(BarbershopError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class DuplicateRecordError(ConflictError):
    """
    Raised by repositories when a write hits a unique constraint.

    ``column`` is the violated column when it could be determined.
    """

    def __init__(self, table: str, column: Optional[str] = None):
        super().__init__(
            f"Duplicate value in {table}" + (f".{column}" if column else ""),
            code="DUPLICATE_RECORD",
            details={"table": table, "column": column},
        )
        self.table = table
        self.column = column
