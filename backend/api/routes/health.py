"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging
import platform
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from modules.users.repository import UserRepository

from ..dependencies import get_user_repository
from ..responses import error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter()

_started_at = time.monotonic()


class WelcomeResponse(BaseModel):
    """API welcome information."""

    label: str
    uptime: float
    version: str
    python: str


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/", response_model=WelcomeResponse)
async def welcome() -> WelcomeResponse:
    """
    API welcome info with process uptime in seconds.
    """
    settings = get_settings()
    return WelcomeResponse(
        label=f"Welcome to {settings.app_name}",
        uptime=round(time.monotonic() - _started_at, 3),
        version=settings.app_version,
        python=platform.python_version(),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready")
async def readiness_check(
    repository: UserRepository = Depends(get_user_repository),
) -> JSONResponse:
    """
    Readiness check endpoint.

    Runs a trivial query against the users table.
    """
    try:
        repository.ping()
    except Exception:
        logger.exception("Readiness check failed")
        return error_response(
            503,
            "Service Unavailable",
            ReadinessResponse(status="unavailable", database="disconnected"),
        )

    return success_response(
        200,
        "Ready",
        ReadinessResponse(status="ready", database="connected"),
    )
