"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from skylogin.config import Settings
from skylogin.persistence.storage import StorageContext

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class StorageHealth(BaseModel):
    """Storage backend status."""

    backend: str
    healthy: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    storage: StorageHealth


@router.get("/health", response_model=HealthResponse)
async def health_check(
    response: Response,
    settings: FromDishka[Settings],
    storage: FromDishka[StorageContext],
) -> HealthResponse:
    """Health check endpoint for monitoring.

    Probes the storage backend (PING for Redis, SELECT 1 for SQLite).
    Never fails with a server error; an unreachable backend is reported
    as ``unhealthy`` with status 503.

    Returns:
        Service and storage health
    """
    healthy = await storage.health_check()
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        git_sha=settings.git_sha,
        storage=StorageHealth(backend=storage.backend_name, healthy=healthy),
    )
