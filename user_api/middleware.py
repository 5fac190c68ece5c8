"""HTTP middleware: exception translation, bearer-token gate, request logging.

Each stage gets its logger passed in through `app.add_middleware(..., logger=...)`
so nothing here depends on a module-level logger.
"""
import logging
import time
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

PUBLIC_PATHS = ("/", "/favicon.ico")
PUBLIC_PREFIXES = ("/swagger", "/api-docs", "/health")

BEARER_PREFIX = "Bearer "
MIN_TOKEN_LENGTH = 10

MISSING_TOKEN = "Missing or invalid authorization token."
BAD_TOKEN_FORMAT = "Invalid token format. Use 'Bearer <token>'."
INVALID_TOKEN = "Invalid token."


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def is_public_path(path: str) -> bool:
    """Public paths skip the token check.

    Prefixes match whole segments only: `/health` and `/health/db` are public,
    `/healthcheck` is not.
    """
    if path in PUBLIC_PATHS:
        return True
    lowered = path.lower()
    return any(lowered == prefix or lowered.startswith(prefix + "/") for prefix in PUBLIC_PREFIXES)


def check_authorization(path: str, header: Optional[str]) -> Optional[str]:
    """Return the rejection reason for a request, or None if it may pass."""
    if is_public_path(path):
        return None
    if header is None or not header.strip():
        return MISSING_TOKEN
    if not header.startswith(BEARER_PREFIX):
        return BAD_TOKEN_FORMAT
    token = header[len(BEARER_PREFIX):].strip()
    if len(token) < MIN_TOKEN_LENGTH:
        return INVALID_TOKEN
    return None


class ExceptionBoundaryMiddleware(BaseHTTPMiddleware):
    """Turn any exception escaping the pipeline into a JSON 500."""

    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(app)
        self.logger = logger or logging.getLogger("user_api.errors")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            self.logger.exception(
                "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
            )
            return JSONResponse(
                {"error": "An unexpected error occurred.", "details": str(exc)},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Require `Authorization: Bearer <token>` on every non-public path.

    The token is only length-checked; there is no signature, expiry or
    identity behind it.
    """

    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(app)
        self.logger = logger or logging.getLogger("user_api.access")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if is_public_path(path):
            return await call_next(request)

        method = request.method
        ip = client_address(request)
        reason = check_authorization(path, request.headers.get("Authorization"))
        if reason is not None:
            self.logger.warning("Unauthorized %s %s from %s: %s", method, path, ip, reason)
            return JSONResponse({"error": reason}, status_code=status.HTTP_401_UNAUTHORIZED)

        self.logger.info("Authenticated %s %s from %s", method, path, ip)
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(app)
        self.logger = logger or logging.getLogger("user_api.requests")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        method, path = request.method, request.url.path
        self.logger.info("Incoming request: %s %s from %s", method, path, client_address(request))

        # The response body is streamed through untouched.
        response = await call_next(request)

        elapsed = (time.perf_counter() - start) * 1000
        self.logger.info(
            "Outgoing response: %s %s => %s (%.1f ms)", method, path, response.status_code, elapsed
        )
        return response
