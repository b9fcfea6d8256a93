"""Core functionality for the deploy gateway."""

from app.core.exceptions import (
    GatewayError,
    InternalError,
    NotFoundError,
    PayloadTooLargeError,
    RateLimitError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from app.core.rate_limit import RateLimiter

__all__ = [
    "GatewayError",
    "InternalError",
    "NotFoundError",
    "PayloadTooLargeError",
    "RateLimitError",
    "UnauthorizedError",
    "UpstreamError",
    "ValidationError",
    "RateLimiter",
]
