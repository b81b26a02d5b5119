"""
Shared infrastructure for the Barbershop backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging_config: Handler setup for the standard logging module
- repository: Base repository with unique-violation translation

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    BarbershopError,
    NotFoundError,
    ConflictError,
    AuthenticationError,
    DuplicateRecordError,
)
from .models import AuthenticatedUser, Role, ALL_ROLES

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "BarbershopError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "DuplicateRecordError",
    "AuthenticatedUser",
    "Role",
    "ALL_ROLES",
]
