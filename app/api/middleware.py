"""Custom middleware for the API."""

import hmac
import time
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.exceptions import (
    PayloadTooLargeError,
    RateLimitError,
    UnauthorizedError,
)
from app.core.rate_limit import RateLimiter
from app.utils.logging import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "X-API-Key"
HEALTH_PATH = "/health"

SECURITY_HEADERS = {
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        request_id = request.headers.get("X-Request-ID", str(time.time_ns()))

        logger.info(
            "request.started",
            method=request.method,
            path=request.url.path,
            request_id=request_id,
        )

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            request_id=request_id,
        )

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        response.headers["X-Request-ID"] = request_id

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add hardening headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds ``max_bytes``."""

    def __init__(self, app: ASGIApp, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("Content-Length", "")
        if declared.isdigit() and int(declared) > self.max_bytes:
            logger.warning(
                "request.too_large",
                ip=client_address(request),
                path=request.url.path,
                content_length=int(declared),
            )
            exc = PayloadTooLargeError(self.max_bytes)
            return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())
        return await call_next(request)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients that exceed the configured request budget."""

    def __init__(self, app: ASGIApp, limiter: RateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        address = client_address(request)
        try:
            self.limiter.check(address)
        except RateLimitError as exc:
            logger.warning("rate_limit.exceeded", ip=address, path=request.url.path)
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.to_envelope(),
                headers={"Retry-After": str(exc.retry_after_seconds)},
            )
        return await call_next(request)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require the shared secret on every path except the liveness probe.

    The exemption is an exact path match. An empty configured secret
    rejects every guarded request.
    """

    def __init__(self, app: ASGIApp, api_key: str, exempt_path: str = HEALTH_PATH):
        super().__init__(app)
        self._api_key = api_key.encode("utf-8")
        self._exempt_path = exempt_path

    def _is_authorized(self, supplied: str | None) -> bool:
        if not supplied or not self._api_key:
            return False
        return hmac.compare_digest(supplied.encode("utf-8"), self._api_key)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == self._exempt_path:
            return await call_next(request)

        if not self._is_authorized(request.headers.get(API_KEY_HEADER)):
            logger.warning(
                "auth.unauthorized",
                ip=client_address(request),
                path=request.url.path,
            )
            exc = UnauthorizedError()
            return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())

        return await call_next(request)
