"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.passwords import PasswordHasher
    from modules.auth.repository import AuthRepository
    from modules.auth.tokens import TokenIssuer
    from modules.users.interfaces import IUserService
    from modules.users.repository import UserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._auth_repository: "AuthRepository | None" = None
        self._user_repository: "UserRepository | None" = None
        self._password_hasher: "PasswordHasher | None" = None
        self._token_issuer: "TokenIssuer | None" = None
        self._auth_service: "IAuthService | None" = None
        self._user_service: "IUserService | None" = None

    @property
    def auth_repository(self) -> "AuthRepository":
        """Get the credential store instance."""
        if self._auth_repository is None:
            from modules.auth.repository import AuthRepository
            from shared.database import get_supabase_client
            self._auth_repository = AuthRepository(
                get_supabase_client(),
                refresh_token_expire_days=get_settings().refresh_token_expire_days,
            )
        return self._auth_repository

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def password_hasher(self) -> "PasswordHasher":
        """Get the password hasher instance."""
        if self._password_hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._password_hasher = PasswordHasher(rounds=get_settings().bcrypt_rounds)
        return self._password_hasher

    @property
    def token_issuer(self) -> "TokenIssuer":
        """Get the access token issuer instance."""
        if self._token_issuer is None:
            from modules.auth.tokens import TokenIssuer
            self._token_issuer = TokenIssuer.from_settings(get_settings())
        return self._token_issuer

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                repository=self.auth_repository,
                hasher=self.password_hasher,
            )
        return self._auth_service

    @property
    def users(self) -> "IUserService":
        """Get the user profile service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                repository=self.user_repository,
                hasher=self.password_hasher,
            )
        return self._user_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_repository = None
        self._user_repository = None
        self._password_hasher = None
        self._token_issuer = None
        self._auth_service = None
        self._user_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "IUserService":
    """FastAPI dependency for user profile service."""
    return get_container().users


def get_token_issuer() -> "TokenIssuer":
    """FastAPI dependency for the access token issuer."""
    return get_container().token_issuer


def get_user_repository() -> "UserRepository":
    """FastAPI dependency for user repository."""
    return get_container().user_repository
