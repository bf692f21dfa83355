"""Health and readiness endpoints."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

router = APIRouter()

HEALTH_VERSION = "1.0.0"
SERVICE_STARTED_AT = datetime.now(timezone.utc)


def _iso_utc(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _uptime_seconds(now: datetime) -> int:
    return max(0, int((now - SERVICE_STARTED_AT).total_seconds()))


class HealthResponse(BaseModel):
    """GET /api/health response."""

    model_config = ConfigDict(extra="forbid")
    success: Annotated[bool, Field(description="Always true")]
    status: Annotated[str, Field(description="Always 'healthy'")]
    version: Annotated[str, Field(description="Semver MAJOR.MINOR.PATCH")]
    timestamp: Annotated[str, Field(description="ISO8601 UTC")]
    uptime_seconds: Annotated[int, Field(description="Seconds service has been up")]


class ReadyResponse(BaseModel):
    """GET /api/ready response."""

    model_config = ConfigDict(extra="forbid")
    status: Annotated[str, Field(description="Always 'ready'")]
    contract_address: Annotated[str, Field(description="Registry contract being read")]
    cache_ttl_seconds: Annotated[float, Field(description="TTL applied to cached contract reads")]


@router.get("/version")
async def version():
    """Return API version (lightweight, for dashboards)."""
    return {"version": HEALTH_VERSION}


@router.get("/ready", response_model=ReadyResponse)
async def ready(request: Request):
    """Readiness probe. 503 until the contract reader is wired."""
    reader = getattr(request.app.state, "contract_reader", None)
    config = getattr(request.app.state, "config", None)
    if reader is None or config is None:
        raise HTTPException(status_code=503, detail="not ready")
    return ReadyResponse(
        status="ready",
        contract_address=config.contract_address,
        cache_ttl_seconds=float(config.cache_ttl_seconds),
    )


@router.get("/health", response_model=HealthResponse)
async def health():
    """Return API health status."""
    now = datetime.now(timezone.utc)
    return HealthResponse(
        success=True,
        status="healthy",
        version=HEALTH_VERSION,
        timestamp=_iso_utc(now),
        uptime_seconds=_uptime_seconds(now),
    )
