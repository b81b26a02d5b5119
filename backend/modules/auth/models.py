"""
Authentication module data models.

Request bodies, the refresh token row, and the results handed from the
service to the route handlers.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.users.models import EmailAddress, UserProfile


class RegisterRequest(BaseModel):
    """Request body for POST /register. Role is never taken from the client."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailAddress
    password: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1, max_length=20)


class LoginRequest(BaseModel):
    """Request body for POST /login."""

    email: str
    password: str


class RefreshTokenRecord(BaseModel):
    """A refresh_tokens row."""

    id: int
    user_id: int
    token: str = Field(..., repr=False)
    expires_at: datetime
    created_at: datetime


class AuthSession(BaseModel):
    """Result of a successful login or refresh."""

    user: UserProfile
    refresh_token: str = Field(..., repr=False)


class TokenPair(BaseModel):
    """Response data for login and refresh, serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    refresh_token: str
