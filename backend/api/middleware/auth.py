"""
Authentication gate and role guard.

Access tokens are taken from the access_token cookie or the bearer header
and verified with the TokenIssuer. Roles come from the verified claims; the
database is not consulted.
"""

from typing import Callable, Coroutine, Any

from fastapi import Depends, HTTPException, Request, status

from shared.models import AuthenticatedUser, Role
from modules.auth.exceptions import InvalidTokenError
from modules.auth.tokens import TokenIssuer
from modules.auth.transport import get_access_token

from ..dependencies import get_token_issuer

FORBIDDEN_MESSAGE = "Forbidden: Insufficient privileges."


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Authorization error for authenticated users with the wrong role."""
    def __init__(self, detail: str = FORBIDDEN_MESSAGE):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def get_current_user(
    request: Request,
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = get_access_token(request)
    if not token:
        raise AuthError("Missing access token")

    try:
        return issuer.verify(token)
    except InvalidTokenError as e:
        raise AuthError(e.message)


def require_roles(
    *roles: Role,
) -> Callable[..., Coroutine[Any, Any, AuthenticatedUser]]:
    """
    Build a dependency that authenticates and then checks the user's role.

    Usage:
        @router.get("/admin-only")
        async def admin_route(user: AuthenticatedUser = Depends(require_roles(Role.ADMIN))):
            ...
    """
    allowed = frozenset(roles)

    async def check_role(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if user.role not in allowed:
            raise ForbiddenError()
        return user

    return check_role

