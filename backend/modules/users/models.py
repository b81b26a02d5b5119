"""
User module data models.

UserRecord carries the password hash and must not leave the repository and
service layers; everything returned to clients is a UserProfile.
"""

from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, validate_email
from pydantic.alias_generators import to_camel

from shared.models import Role


def _check_email_format(value: str) -> str:
    """Reject malformed addresses but keep the value exactly as submitted."""
    validate_email(value)
    return value


# Stored and looked up verbatim, so login matches what registration wrote
EmailAddress = Annotated[str, AfterValidator(_check_email_format)]


class UserProfile(BaseModel):
    """Public view of a user."""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Unique user name")
    email: str = Field(..., description="Unique email address")
    role: Role = Field(default=Role.CUSTOMER, description="User role")
    phone: str = Field(..., description="Unique phone number")


class UserRecord(UserProfile):
    """A users row, including the password hash."""

    password: str = Field(..., description="bcrypt hash", repr=False)

    def to_profile(self) -> UserProfile:
        """Strip the password hash."""
        return UserProfile(**self.model_dump(exclude={"password"}))


class UpdateProfileRequest(BaseModel):
    """Request body for PUT /me. Omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=100, description="The name of the user")
    email: Optional[EmailAddress] = Field(None, description="The email of the user")
    phone: Optional[str] = Field(None, min_length=1, max_length=20, description="The phone number of the user")


class ChangePasswordRequest(BaseModel):
    """Request body for PUT /change-password."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    old_password: str = Field(..., description="The old password of the user")
    new_password: str = Field(..., min_length=1, description="The new password of the user")
