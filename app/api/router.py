"""Main API router."""

from fastapi import APIRouter

from app.api.routes import deployments, health, projects

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(deployments.router, prefix="/api/deploy", tags=["deployments"])
router.include_router(projects.router, prefix="/api", tags=["projects"])
