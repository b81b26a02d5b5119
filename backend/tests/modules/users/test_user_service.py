"""Tests for UserService against the in-memory store."""

from unittest.mock import MagicMock

import pytest

from modules.auth.exceptions import InvalidCredentialsError, UserExistsError
from modules.auth.models import RegisterRequest
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserService
from modules.users.models import UpdateProfileRequest
from modules.users.service import UserService
from shared.exceptions import DuplicateRecordError


@pytest.fixture
def other_user(repository, hasher):
    return repository.create_user(
        RegisterRequest(name="bob", email="bob@example.com", password="x", phone="+15550002"),
        hasher.hash("x"),
    )


class TestInterface:
    def test_satisfies_protocol(self, user_service):
        assert isinstance(user_service, IUserService)


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_found(self, user_service, registered_user):
        profile = await user_service.get_profile(registered_user.id)
        assert profile.email == "alice@example.com"
        assert not hasattr(profile, "password")

    @pytest.mark.asyncio
    async def test_not_found(self, user_service):
        with pytest.raises(UserNotFoundError) as exc_info:
            await user_service.get_profile(42)
        assert exc_info.value.message == "User is not found"


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_updates_given_fields(self, user_service, repository, registered_user):
        profile = await user_service.update_profile(
            registered_user.id, UpdateProfileRequest(name="alice2", phone="+15559999")
        )

        assert profile.name == "alice2"
        assert profile.phone == "+15559999"
        assert profile.email == "alice@example.com"
        assert repository.users[registered_user.id].name == "alice2"

    @pytest.mark.asyncio
    async def test_keeping_own_values_is_not_a_conflict(self, user_service, registered_user):
        profile = await user_service.update_profile(
            registered_user.id,
            UpdateProfileRequest(name="alice", email="alice@example.com", phone="+15550001"),
        )
        assert profile.name == "alice"

    @pytest.mark.asyncio
    async def test_empty_update(self, user_service, registered_user):
        profile = await user_service.update_profile(registered_user.id, UpdateProfileRequest())
        assert profile == registered_user.to_profile()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("email", "bob@example.com", "User with this email already exists."),
            ("name", "bob", "User with this name already exists."),
            ("phone", "+15550002", "User with this phone already exists."),
        ],
    )
    async def test_conflict(self, user_service, repository, registered_user, other_user, field, value, message):
        with pytest.raises(UserExistsError) as exc_info:
            await user_service.update_profile(
                registered_user.id, UpdateProfileRequest(**{field: value})
            )
        assert exc_info.value.message == message
        assert repository.users[registered_user.id] == registered_user

    @pytest.mark.asyncio
    async def test_email_checked_first(self, user_service, registered_user, other_user):
        with pytest.raises(UserExistsError) as exc_info:
            await user_service.update_profile(
                registered_user.id,
                UpdateProfileRequest(name="bob", email="bob@example.com"),
            )
        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_not_found(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.update_profile(42, UpdateProfileRequest(name="x"))

    @pytest.mark.asyncio
    async def test_lost_race_is_a_conflict(self, hasher, registered_user):
        repository = MagicMock()
        repository.find_by_id.return_value = registered_user
        repository.find_by_name.return_value = None
        repository.update.side_effect = DuplicateRecordError("users", "name")
        service = UserService(repository=repository, hasher=hasher)

        with pytest.raises(UserExistsError) as exc_info:
            await service.update_profile(registered_user.id, UpdateProfileRequest(name="bob"))
        assert exc_info.value.message == "User with this name already exists."


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_success(self, user_service, repository, hasher, registered_user):
        await user_service.change_password(registered_user.id, "p@ss1", "n3w")

        stored = repository.users[registered_user.id].password
        assert hasher.verify("n3w", stored)
        assert not hasher.verify("p@ss1", stored)

    @pytest.mark.asyncio
    async def test_wrong_old_password(self, user_service, repository, registered_user):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await user_service.change_password(registered_user.id, "wrong", "n3w")
        assert exc_info.value.message == "Incorrect old password."
        assert repository.users[registered_user.id].password == registered_user.password

    @pytest.mark.asyncio
    async def test_not_found(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.change_password(42, "a", "b")

    @pytest.mark.asyncio
    async def test_sessions_survive(self, user_service, repository, registered_user):
        """Existing refresh tokens are not revoked by a password change."""
        token = repository.create_refresh_token(registered_user.id)
        await user_service.change_password(registered_user.id, "p@ss1", "n3w")
        assert repository.find_valid_refresh_token(token) is not None
