"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from pydantic import BaseModel, Field


class Role(str, Enum):
    """User roles, matching the CHECK constraint on users.role."""

    CUSTOMER = "customer"
    BARBER = "barber"
    ADMIN = "admin"


ALL_ROLES: tuple[Role, ...] = (Role.CUSTOMER, Role.BARBER, Role.ADMIN)


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from verified access token claims and made
    available to route handlers via dependency injection. The database
    is not consulted to build it.
    """

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Unique user name")
    email: str = Field(..., description="User's email address")
    phone: str = Field(..., description="User's phone number")
    role: Role = Field(default=Role.CUSTOMER, description="User role")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore exp/iat claims
    }
