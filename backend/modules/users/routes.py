"""
User profile API endpoints.

All routes act on the user identified by the access token.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_user_service
from api.middleware.auth import require_roles
from api.models import Envelope, ErrorEnvelope
from api.responses import INTERNAL_SERVER_ERROR, error_response, success_response
from shared.models import ALL_ROLES, AuthenticatedUser
from modules.auth.exceptions import InvalidCredentialsError, UserExistsError

from .interfaces import IUserService
from .models import ChangePasswordRequest, UpdateProfileRequest, UserProfile
from .exceptions import UserNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    403: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
    409: {"model": ErrorEnvelope},
    500: {"model": ErrorEnvelope},
}

AnyRole = Depends(require_roles(*ALL_ROLES))


@router.get("/me", response_model=Envelope[UserProfile], responses=ERROR_RESPONSES)
async def get_profile(
    user: AuthenticatedUser = AnyRole,
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    """
    Get the current user's profile.
    """
    try:
        profile = await service.get_profile(user.id)
    except UserNotFoundError as e:
        logger.warning("Profile requested for missing user %s", user.id)
        return error_response(404, e.message)
    except Exception:
        logger.exception("Error getting user information")
        return error_response(500, INTERNAL_SERVER_ERROR)

    return success_response(200, "Successfully get the user information", profile)


@router.put("/me", response_model=Envelope[UserProfile], responses=ERROR_RESPONSES)
async def update_profile(
    body: UpdateProfileRequest,
    user: AuthenticatedUser = AnyRole,
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    """
    Update name, email and/or phone of the current user.
    """
    try:
        profile = await service.update_profile(user.id, body)
    except UserExistsError as e:
        logger.warning(
            "User update information failed - user with credentials already exists: %s",
            e.message,
        )
        return error_response(409, e.message)
    except UserNotFoundError as e:
        logger.warning("Profile update for missing user %s", user.id)
        return error_response(404, e.message)
    except Exception:
        logger.exception("Error updating user information")
        return error_response(500, INTERNAL_SERVER_ERROR)

    return success_response(200, "Successfully update the user information", profile)


@router.put("/change-password", response_model=Envelope[None], responses=ERROR_RESPONSES)
async def change_password(
    body: ChangePasswordRequest,
    user: AuthenticatedUser = AnyRole,
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    """
    Change the current user's password.
    """
    try:
        await service.change_password(user.id, body.old_password, body.new_password)
    except UserNotFoundError as e:
        logger.warning("Password change for missing user %s", user.id)
        return error_response(401, e.message)
    except InvalidCredentialsError as e:
        logger.warning("Password change failed - incorrect old password for user %s", user.id)
        return error_response(401, e.message)
    except Exception:
        logger.exception("Error changing password for user %s", user.id)
        return error_response(500, INTERNAL_SERVER_ERROR)

    return success_response(200, "Password updated successfully")
