"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
signing keys, a token issuer, an in-memory credential store and an app
wired to it.
"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    get_auth_service,
    get_token_issuer,
    get_user_repository,
    get_user_service,
    reset_container,
)
from modules.auth.models import RefreshTokenRecord, RegisterRequest
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AuthService
from modules.auth.tokens import TokenIssuer, generate_refresh_token
from modules.users.models import UserProfile, UserRecord
from modules.users.service import UserService
from run_keygen import generate_key_pair
from shared.exceptions import DuplicateRecordError
from shared.models import Role


class InMemoryAuthRepository:
    """
    Dict-backed stand-in for AuthRepository.

    Enforces the same unique columns as the users table so races and
    duplicate writes can be simulated.
    """

    UNIQUE_COLUMNS = ("email", "name", "phone")

    def __init__(self, refresh_token_ttl: timedelta = timedelta(days=30)):
        self.users: dict[int, UserRecord] = {}
        self.refresh_tokens: dict[str, RefreshTokenRecord] = {}
        self.refresh_token_ttl = refresh_token_ttl
        self._user_ids = itertools.count(1)
        self._token_ids = itertools.count(1)

    # Lookups

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find("email", email)

    def find_by_name(self, name: str) -> Optional[UserRecord]:
        return self._find("name", name)

    def find_by_phone(self, phone: str) -> Optional[UserRecord]:
        return self._find("phone", phone)

    # Writes

    def create_user(
        self,
        registration: RegisterRequest,
        password_hash: str,
        role: Role = Role.CUSTOMER,
    ) -> UserRecord:
        values = {"email": registration.email, "name": registration.name, "phone": registration.phone}
        self._check_unique(values)
        record = UserRecord(
            id=next(self._user_ids),
            password=password_hash,
            role=role,
            **values,
        )
        self.users[record.id] = record
        return record

    def update(self, user_id: int, updates: dict[str, Any]) -> Optional[UserProfile]:
        record = self.users.get(user_id)
        if record is None:
            return None
        data = {k: v for k, v in updates.items() if k in self.UNIQUE_COLUMNS and v is not None}
        self._check_unique(data, exclude_id=user_id)
        record = record.model_copy(update=data)
        self.users[user_id] = record
        return record.to_profile()

    def update_password(self, user_id: int, password_hash: str) -> None:
        record = self.users[user_id]
        self.users[user_id] = record.model_copy(update={"password": password_hash})

    def create_refresh_token(self, user_id: int) -> str:
        token = generate_refresh_token()
        now = datetime.now(timezone.utc)
        self.refresh_tokens[token] = RefreshTokenRecord(
            id=next(self._token_ids),
            user_id=user_id,
            token=token,
            expires_at=now + self.refresh_token_ttl,
            created_at=now,
        )
        return token

    def find_valid_refresh_token(self, token: str) -> Optional[RefreshTokenRecord]:
        record = self.refresh_tokens.get(token)
        if record is None or record.expires_at <= datetime.now(timezone.utc):
            return None
        return record

    def delete_refresh_token(self, token: str) -> bool:
        return self.refresh_tokens.pop(token, None) is not None

    def ping(self) -> None:
        return None

    # Test helpers

    def tokens_for(self, user_id: int) -> list[str]:
        return [t for t, r in self.refresh_tokens.items() if r.user_id == user_id]

    def expire(self, token: str) -> None:
        record = self.refresh_tokens[token]
        self.refresh_tokens[token] = record.model_copy(
            update={"expires_at": datetime.now(timezone.utc) - timedelta(seconds=1)}
        )

    def _find(self, column: str, value: str) -> Optional[UserRecord]:
        return next((u for u in self.users.values() if getattr(u, column) == value), None)

    def _check_unique(self, values: dict[str, Any], exclude_id: Optional[int] = None) -> None:
        for column, value in values.items():
            owner = self._find(column, value)
            if owner is not None and owner.id != exclude_id:
                raise DuplicateRecordError("users", column)


@pytest.fixture(autouse=True)
def reset_services():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture(scope="session")
def key_pair() -> tuple[bytes, bytes]:
    """A P-256 (private_pem, public_pem) pair, generated once per run."""
    return generate_key_pair()


@pytest.fixture
def issuer(key_pair) -> TokenIssuer:
    private_pem, public_pem = key_pair
    return TokenIssuer(private_pem, public_pem)


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    """Low work factor keeps the suite fast; the scheme is the same."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def repository() -> InMemoryAuthRepository:
    return InMemoryAuthRepository()


@pytest.fixture
def auth_service(repository, hasher) -> AuthService:
    return AuthService(repository=repository, hasher=hasher)


@pytest.fixture
def user_service(repository, hasher) -> UserService:
    return UserService(repository=repository, hasher=hasher)


@pytest.fixture
def app(repository, auth_service, user_service, issuer):
    """A fresh app whose services run on the in-memory repository."""
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_token_issuer] = lambda: issuer
    app.dependency_overrides[get_user_repository] = lambda: repository
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def registration() -> dict[str, str]:
    """A valid POST /register body."""
    return {
        "name": "alice",
        "email": "alice@example.com",
        "password": "p@ss1",
        "phone": "+15550001",
    }


@pytest.fixture
def registered_user(repository, hasher, registration) -> UserRecord:
    """A customer stored directly in the repository."""
    return repository.create_user(
        RegisterRequest(**registration),
        hasher.hash(registration["password"]),
    )


@pytest.fixture
def auth_headers(issuer, registered_user) -> dict[str, str]:
    """Bearer header carrying a valid access token for registered_user."""
    token = issuer.issue_access_token(registered_user.to_profile())
    return {"Authorization": f"Bearer {token}"}
