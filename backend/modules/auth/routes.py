"""
Authentication API endpoints.

Maps register/login/logout/refresh onto the auth service, translates
domain errors to status codes, and manages the session cookies.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service, get_token_issuer
from api.models import Envelope, ErrorEnvelope
from api.responses import INTERNAL_SERVER_ERROR, error_response, success_response
from modules.users.models import UserProfile

from .interfaces import IAuthService
from .models import LoginRequest, RegisterRequest, TokenPair
from .tokens import TokenIssuer
from .transport import (
    clear_auth_cookies,
    get_refresh_token,
    is_secure_request,
    set_auth_cookies,
)
from .exceptions import InvalidCredentialsError, InvalidTokenError, UserExistsError

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    409: {"model": ErrorEnvelope},
    500: {"model": ErrorEnvelope},
}


@router.post(
    "/register",
    status_code=201,
    response_model=Envelope[UserProfile],
    responses=ERROR_RESPONSES,
)
async def register(
    body: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Register a new customer account.
    """
    try:
        user = await service.register(body)
    except UserExistsError as e:
        logger.warning(
            "User registration failed - user with credentials already exists: %s",
            e.message,
        )
        return error_response(409, e.message)
    except Exception:
        logger.exception("Error registering user")
        return error_response(500, INTERNAL_SERVER_ERROR)

    return success_response(201, "User registered successfully", user)


@router.post(
    "/login",
    response_model=Envelope[TokenPair],
    responses=ERROR_RESPONSES,
)
async def login(
    body: LoginRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> JSONResponse:
    """
    Log in with email and password.

    Returns both tokens in the body and sets them as HttpOnly cookies.
    """
    try:
        session = await service.login(body)
        access_token = issuer.issue_access_token(session.user)
    except InvalidCredentialsError as e:
        logger.warning("User login failed - invalid email or password")
        return error_response(401, e.message)
    except Exception:
        logger.exception("Error logging in user")
        return error_response(500, INTERNAL_SERVER_ERROR)

    response = success_response(
        200,
        "User logged in successfully",
        TokenPair(access_token=access_token, refresh_token=session.refresh_token),
    )
    set_auth_cookies(response, access_token, session.refresh_token, is_secure_request(request))
    return response


@router.delete(
    "/logout",
    response_model=Envelope[None],
    responses=ERROR_RESPONSES,
)
async def logout(
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Log out by deleting the refresh token.

    Both cookies are cleared whether or not the token was valid.
    """
    try:
        await service.logout(get_refresh_token(request))
        response = success_response(200, "Logout successful")
    except InvalidTokenError as e:
        logger.warning("Invalid token on logout: %s", e.message)
        response = error_response(401, e.message)
    except Exception:
        logger.exception("Error logging out user")
        response = error_response(500, INTERNAL_SERVER_ERROR)

    clear_auth_cookies(response)
    return response


@router.post(
    "/refresh",
    response_model=Envelope[TokenPair],
    responses=ERROR_RESPONSES,
)
async def refresh(
    request: Request,
    service: IAuthService = Depends(get_auth_service),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> JSONResponse:
    """
    Exchange a refresh token for a new access/refresh pair.

    The old refresh token stops working. On any failure both cookies are
    cleared so the client has to log in again.
    """
    try:
        session = await service.refresh(get_refresh_token(request))
        access_token = issuer.issue_access_token(session.user)
    except InvalidTokenError as e:
        logger.warning("Invalid token on refresh: %s", e.message)
        response = error_response(401, e.message)
        clear_auth_cookies(response)
        return response
    except Exception:
        logger.exception("Error refreshing tokens")
        response = error_response(500, INTERNAL_SERVER_ERROR)
        clear_auth_cookies(response)
        return response

    response = success_response(
        200,
        "Tokens refreshed successfully",
        TokenPair(access_token=access_token, refresh_token=session.refresh_token),
    )
    set_auth_cookies(response, access_token, session.refresh_token, is_secure_request(request))
    return response
