"""
Health check endpoints.

Provides endpoints for monitoring application health.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from branchreport.core.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    environment: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check; no external services are involved."""
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        version=settings.app_version,
    )
