"""
Response envelope.

Every response body has the same shape:
    {"error": bool, "code": int, "message": str, "data": any}
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "Internal Server Error"


def _envelope(
    status_code: int,
    message: str,
    data: Any,
    error: bool,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "code": status_code,
            "message": message,
            "data": jsonable_encoder(data),
        },
        headers=headers,
    )


def success_response(status_code: int, message: str, data: Any = None) -> JSONResponse:
    """Build a successful envelope response."""
    return _envelope(status_code, message, data, error=False)


def error_response(
    status_code: int,
    message: str,
    data: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a failed envelope response."""
    return _envelope(status_code, message, data, error=True, headers=headers)


# -----------------------------------------------------------------------------
# Exception handlers (registered in api.app)
# -----------------------------------------------------------------------------


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTPException (auth gate, unknown routes, ...) as an envelope."""
    return error_response(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as a 400 envelope."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"

    logger.warning("Request validation failed on %s: %s", request.url.path, message)
    return error_response(
        400,
        message,
        data=[
            {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
            for e in errors
        ],
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render anything else as a generic 500; the request logger records the traceback."""
    return error_response(500, INTERNAL_SERVER_ERROR)
