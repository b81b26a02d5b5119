"""
Session transport: where tokens travel between client and server.

Browsers get both tokens as HttpOnly cookies. API clients that cannot keep
cookies send the token in an ``Authorization: Bearer`` header instead. The
cookie always wins when both are present.
"""

from datetime import datetime, timezone
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response

ACCESS_TOKEN_COOKIE_NAME = "access_token"
REFRESH_TOKEN_COOKIE_NAME = "refresh_token"
ACCESS_TOKEN_MAX_AGE = 60 * 15  # 15 minutes
REFRESH_TOKEN_MAX_AGE = 60 * 60 * 24 * 30  # 30 days

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_BEARER_PREFIX = "Bearer "


def is_secure_request(request: Request) -> bool:
    """Whether the request arrived over HTTPS (after proxy header handling)."""
    return request.url.scheme == "https"


def _set_token_cookie(
    response: Response,
    name: str,
    token: str,
    max_age: int,
    secure: bool,
) -> None:
    response.set_cookie(
        key=name,
        value=token,
        max_age=max_age,
        path="/",
        secure=secure,
        httponly=True,
        samesite="lax",
    )


def _clear_token_cookie(response: Response, name: str) -> None:
    response.set_cookie(
        key=name,
        value="",
        max_age=0,
        expires=_EPOCH,
        path="/",
        secure=False,
        httponly=True,
        samesite="lax",
    )


def set_access_token_cookie(response: Response, token: str, secure: bool) -> None:
    _set_token_cookie(response, ACCESS_TOKEN_COOKIE_NAME, token, ACCESS_TOKEN_MAX_AGE, secure)


def set_refresh_token_cookie(response: Response, token: str, secure: bool) -> None:
    _set_token_cookie(response, REFRESH_TOKEN_COOKIE_NAME, token, REFRESH_TOKEN_MAX_AGE, secure)


def clear_access_token_cookie(response: Response) -> None:
    _clear_token_cookie(response, ACCESS_TOKEN_COOKIE_NAME)


def clear_refresh_token_cookie(response: Response) -> None:
    _clear_token_cookie(response, REFRESH_TOKEN_COOKIE_NAME)


def set_auth_cookies(
    response: Response,
    access_token: str,
    refresh_token: str,
    secure: bool,
) -> None:
    """Set both session cookies."""
    set_refresh_token_cookie(response, refresh_token, secure)
    set_access_token_cookie(response, access_token, secure)


def clear_auth_cookies(response: Response) -> None:
    """Expire both session cookies."""
    clear_access_token_cookie(response)
    clear_refresh_token_cookie(response)


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization")
    if header and header.startswith(_BEARER_PREFIX):
        return header[len(_BEARER_PREFIX):] or None
    return None


def get_access_token(request: Request) -> Optional[str]:
    """Access token from its cookie, else from the bearer header."""
    return request.cookies.get(ACCESS_TOKEN_COOKIE_NAME) or _bearer_token(request)


def get_refresh_token(request: Request) -> Optional[str]:
    """Refresh token from its cookie, else from the bearer header."""
    return request.cookies.get(REFRESH_TOKEN_COOKIE_NAME) or _bearer_token(request)
