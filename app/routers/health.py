# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health and version endpoints for monitoring and load balancers.
# Neither endpoint touches the datastore.
# =============================================================================

import platform
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import SettingsDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    ok: bool
    service: str
    time: str


class VersionResponse(BaseModel):
    """Deployed commit and runtime version."""
    commit: str | None
    python: str


def utc_timestamp() -> str:
    """Current UTC time, ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """
    Health check endpoint.

    Always succeeds while the process is serving.
    """
    return HealthResponse(
        ok=True,
        service=settings.SERVICE_NAME,
        time=utc_timestamp(),
    )


@router.get("/version", response_model=VersionResponse)
async def version(settings: SettingsDep):
    """Report the deployed commit (if the platform provides one)."""
    return VersionResponse(
        commit=settings.COMMIT_SHA,
        python=platform.python_version(),
    )
