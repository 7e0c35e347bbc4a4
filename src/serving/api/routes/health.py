"""
Health Check Endpoints

Liveness and readiness probes backed by the document store ping.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from src.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    checks: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Reports "degraded" when the document store does not answer.
    """
    settings = get_settings()
    store_health = await request.app.state.store.health()

    return HealthResponse(
        status="healthy" if store_health.get("status") == "healthy" else "degraded",
        version=settings.version,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
        checks={"document_store": store_health},
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """Returns 200 while the process is running."""
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_check(request: Request, response: Response) -> Dict[str, str]:
    """Returns 503 until the document store answers."""
    store_health = await request.app.state.store.health()
    if store_health.get("status") != "healthy":
        response.status_code = 503
        return {"status": "not_ready", "reason": "document_store_unavailable"}
    return {"status": "ready"}
