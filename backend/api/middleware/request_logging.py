"""
Request logging middleware.

Logs one line when a request arrives and one when it completes, tied
together by a per-request id.
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("api.requests")


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Log request start, completion, and unhandled errors."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    client_ip = request.client.host if request.client else "-"
    started = time.perf_counter()

    logger.info(
        "Incoming %s request id=%s url=%s ip=%s",
        request.method, request_id, request.url.path, client_ip,
    )

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "Unhandled request error id=%s method=%s url=%s",
            request_id, request.method, request.url.path,
        )
        raise

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Request completed id=%s method=%s url=%s status=%d time=%.2fms",
        request_id, request.method, request.url.path, response.status_code, elapsed_ms,
    )
    return response
