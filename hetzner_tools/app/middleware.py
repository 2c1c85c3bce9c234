"""
Middleware - Request logging and last-resort error handling.
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

__all__ = ["ErrorMiddleware", "LoggingMiddleware"]

logger = structlog.get_logger(__name__)

TOOL_PREFIX = "/tools/"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request, tagged with the tool name for tool calls.

    Health checks are not logged.
    """

    QUIET_PATHS = {"/health"}

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in self.QUIET_PATHS:
            return await call_next(request)

        started = time.monotonic()
        response = await call_next(request)

        fields = {}
        if path.startswith(TOOL_PREFIX):
            fields["tool"] = path[len(TOOL_PREFIX):]
        logger.info(
            "http_request",
            method=request.method,
            path=path,
            status=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
            **fields,
        )
        return response


class ErrorMiddleware(BaseHTTPMiddleware):
    """Answers an unhandled exception with an error result instead of a trace."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("bridge_error", method=request.method, path=request.url.path)
            return JSONResponse(
                status_code=500,
                content={"text": "Error: An unexpected error occurred.", "is_error": True},
            )
