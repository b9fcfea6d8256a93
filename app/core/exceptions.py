"""Gateway exceptions, each mapped to one HTTP status and the error envelope."""

from typing import Any


class GatewayError(Exception):
    """Base exception for the gateway.

    Rendered as ``{"error": message, "details": details}``; ``details`` is
    omitted when empty. ``extra`` carries additional top-level envelope keys.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: str | None = None,
        extra: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details
        self.extra = extra or {}
        super().__init__(message)

    def to_envelope(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"error": self.message}
        if self.details:
            envelope["details"] = self.details
        envelope.update(self.extra)
        return envelope


class ValidationError(GatewayError):
    """Missing or malformed required input."""

    status_code = 400


class UnauthorizedError(GatewayError):
    """Missing or wrong shared secret."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(GatewayError):
    """No route matches the request."""

    status_code = 404

    def __init__(self, message: str = "Endpoint not found"):
        super().__init__(message)


class RateLimitError(GatewayError):
    """Too many requests from one client in the current window."""

    status_code = 429

    def __init__(self, retry_after_seconds: int):
        super().__init__(
            "Too many requests from this IP, please try again later.",
            extra={"retryAfterSeconds": retry_after_seconds},
        )
        self.retry_after_seconds = retry_after_seconds


class PayloadTooLargeError(GatewayError):
    """Request body over the configured size limit."""

    status_code = 413

    def __init__(self, limit_bytes: int):
        super().__init__(
            "Request body too large",
            details=f"Limit is {limit_bytes} bytes",
        )


class UpstreamError(GatewayError):
    """The Vercel API call failed: transport error, non-2xx or malformed body."""

    status_code = 500


class InternalError(GatewayError):
    """Unexpected local fault."""

    status_code = 500

    def __init__(self, message: str = "Internal server error", details: str | None = None):
        super().__init__(message, details)
