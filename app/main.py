"""FastAPI application entry point."""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.api.middleware import (
    APIKeyMiddleware,
    BodySizeLimitMiddleware,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from app.api.router import router
from app.config import Settings, get_settings
from app.core.exceptions import (
    GatewayError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.core.rate_limit import RateLimiter
from app.services.deployments import DeploymentService
from app.services.vercel import VercelClient
from app.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    configure_logging(settings)
    logger.info(
        "application.starting",
        version=__version__,
        environment=settings.app_env,
        port=settings.api_port,
    )

    yield

    await app.state.vercel_client.aclose()
    logger.info("application.shutdown")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``transport`` replaces the network transport of the Vercel client.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Deploy Gateway",
        description="Authenticated gateway in front of the Vercel deployment API",
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    vercel_client = VercelClient(settings, transport=transport)
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.vercel_client = vercel_client
    app.state.deployment_service = DeploymentService(vercel_client, settings)
    app.state.rate_limiter = RateLimiter(
        settings.rate_limit_requests, settings.rate_limit_window_seconds
    )

    # Last added runs first: security headers, CORS, logging, body size,
    # rate limit, then the API key check
    app.add_middleware(APIKeyMiddleware, api_key=settings.gateway_api_key)
    app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        """Render gateway errors as the error envelope."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed bodies are 400s in the gateway's envelope."""
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        details = f"{location}: {first.get('msg', 'invalid')}" if location else None
        error = ValidationError("Invalid request body", details=details)
        return JSONResponse(status_code=error.status_code, content=error.to_envelope())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unmatched paths and methods are reported as not found."""
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            not_found = NotFoundError()
            return JSONResponse(
                status_code=not_found.status_code, content=not_found.to_envelope()
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected errors."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True,
        )

        content = InternalError().to_envelope()
        if settings.is_development:
            content["message"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )

    app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
