"""
Access and refresh token issuance.

Access tokens are ES256 JWTs signed with the server's EC private key and
verified with the matching public key. They are never stored; a token is
valid as long as its signature checks out and it has not expired.

Refresh tokens are opaque random strings persisted by the repository.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Union

import jwt
from pydantic import ValidationError

from shared.config import Settings
from shared.models import AuthenticatedUser
from modules.users.models import UserProfile

from .exceptions import InvalidTokenError, ExpiredTokenError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_EXPIRE_MINUTES = 15
REFRESH_TOKEN_BYTES = 32

PemKey = Union[str, bytes]


def generate_refresh_token() -> str:
    """Return a new refresh token: 32 random bytes, hex encoded."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


class TokenIssuer:
    """
    Signs and verifies access tokens.

    Claims: id, name, email, phone and role, plus the standard iat/exp.
    """

    def __init__(
        self,
        private_key: PemKey,
        public_key: PemKey,
        algorithm: str = "ES256",
        expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self._private_key = private_key
        self._public_key = public_key
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expires_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        """
        Build an issuer from the PEM files named in settings.

        Raises:
            RuntimeError: If either key file is missing
        """
        private_path = Path(settings.jwt_private_key_path)
        public_path = Path(settings.jwt_public_key_path)

        for path in (private_path, public_path):
            if not path.is_file():
                raise RuntimeError(
                    f"JWT key file not found: {path}. "
                    "Run run_keygen.py or set JWT_PRIVATE_KEY_PATH and JWT_PUBLIC_KEY_PATH."
                )

        return cls(
            private_key=private_path.read_bytes(),
            public_key=public_path.read_bytes(),
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.access_token_expire_minutes,
        )

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue_access_token(self, user: UserProfile) -> str:
        """Sign a short-lived access token for a user."""
        now = datetime.now(timezone.utc)
        payload = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "phone": user.phone,
            "role": user.role.value,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(payload, self._private_key, algorithm=self._algorithm)

    def verify(self, token: str) -> AuthenticatedUser:
        """
        Verify an access token and return its claims.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: For any other verification failure
        """
        if not token:
            raise InvalidTokenError("Missing access token")

        try:
            payload = jwt.decode(
                token,
                self._public_key,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError("Access token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug("Access token rejected: %s", e)
            raise InvalidTokenError("Invalid access token")

        try:
            return AuthenticatedUser.model_validate(payload)
        except ValidationError:
            raise InvalidTokenError("Invalid access token")
