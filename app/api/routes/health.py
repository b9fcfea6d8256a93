"""Health check endpoint."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.api.deps import VercelClientDep
from app.models.health import HealthResponse
from app.services.health import probe_upstream

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def health_check(request: Request, client: VercelClientDep) -> JSONResponse:
    """Report uptime and Vercel connectivity. Unauthenticated."""
    report = await probe_upstream(client, request.app.state.started_at)
    return JSONResponse(
        status_code=(
            status.HTTP_200_OK
            if report.vercel.connected
            else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content=report.model_dump(exclude_none=True),
    )
