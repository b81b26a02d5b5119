"""
Credential store.

Extends the user repository with account creation and the refresh_tokens
table. Refresh tokens are stored as issued: they are random bearer values,
so a lookup by exact value is all that is needed.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError
from supabase import Client

from shared.models import Role
from modules.users.models import UserRecord
from modules.users.repository import UserRepository, USERS_TABLE

from .models import RegisterRequest, RefreshTokenRecord
from .tokens import generate_refresh_token

REFRESH_TOKENS_TABLE = "refresh_tokens"
REFRESH_TOKEN_EXPIRE_DAYS = 30


class AuthRepository(UserRepository):
    """
    Repository for accounts and sessions.

    Note: This repository does NOT hash passwords. The service passes the
    hash in; plaintext never reaches this layer.
    """

    def __init__(
        self,
        db: Client,
        refresh_token_expire_days: int = REFRESH_TOKEN_EXPIRE_DAYS,
    ) -> None:
        super().__init__(db)
        self._refresh_token_ttl = timedelta(days=refresh_token_expire_days)

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def create_user(
        self,
        registration: RegisterRequest,
        password_hash: str,
        role: Role = Role.CUSTOMER,
    ) -> UserRecord:
        """
        Insert a new user.

        Args:
            registration: Validated registration data. Its password is ignored.
            password_hash: bcrypt hash of the password.
            role: Role chosen by the server, never by the client.

        Returns:
            The inserted row including the generated id.

        Raises:
            DuplicateRecordError: If name, email or phone is already taken.
        """
        data = {
            "name": registration.name,
            "email": registration.email,
            "password": password_hash,
            "role": role.value,
            "phone": registration.phone,
        }
        try:
            result = self._db.table(USERS_TABLE).insert(data).execute()
        except APIError as e:
            self._raise_if_duplicate(e, USERS_TABLE)
            raise

        return self._map_to_user(result.data[0])

    # -------------------------------------------------------------------------
    # Refresh tokens
    # -------------------------------------------------------------------------

    def create_refresh_token(self, user_id: int) -> str:
        """
        Issue and persist a refresh token for a user.

        Returns:
            The raw token value.
        """
        token = generate_refresh_token()
        now = datetime.now(timezone.utc)
        data = {
            "user_id": user_id,
            "token": token,
            "expires_at": (now + self._refresh_token_ttl).isoformat(),
            "created_at": now.isoformat(),
        }
        self._db.table(REFRESH_TOKENS_TABLE).insert(data).execute()
        return token

    def find_valid_refresh_token(self, token: str) -> Optional[RefreshTokenRecord]:
        """
        Find a refresh token that exists and has not expired.

        An expired row is treated exactly like a missing one.
        """
        now = datetime.now(timezone.utc).isoformat()
        result = (
            self._db.table(REFRESH_TOKENS_TABLE)
            .select("*")
            .eq("token", token)
            .gt("expires_at", now)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_refresh_token(result.data[0])

    def delete_refresh_token(self, token: str) -> bool:
        """
        Delete a refresh token.

        Returns:
            True if a row was deleted.
        """
        result = self._db.table(REFRESH_TOKENS_TABLE).delete().eq("token", token).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_refresh_token(self, data: dict[str, Any]) -> RefreshTokenRecord:
        """Map database row to RefreshTokenRecord model."""
        return RefreshTokenRecord(
            id=data["id"],
            user_id=data["user_id"],
            token=data["token"],
            expires_at=data["expires_at"],
            created_at=data["created_at"],
        )
