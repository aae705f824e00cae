"""API middleware -- request logging and error handling.

``RagDocsError`` subclasses that escape a route are turned into a
``{"text": ..., "is_error": true}`` body, the same shape as any other tool
result.  Invalid input and configuration map to 400, everything else to 500.
"""

from __future__ import annotations

import time

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from ragdocs.api.schemas import ToolResponseBody
from ragdocs.utils.errors import InvalidConfigurationError, InvalidInputError, RagDocsError
from ragdocs.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_CLIENT_ERRORS = (InvalidInputError, InvalidConfigurationError)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Render ``RagDocsError`` subclasses as error-flagged tool bodies.

    Stack traces are logged server-side only.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except RagDocsError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ToolResponseBody(text=exc.message, is_error=True)
            return JSONResponse(
                status_code=400 if isinstance(exc, _CLIENT_ERRORS) else 500,
                content=body.model_dump(),
            )
