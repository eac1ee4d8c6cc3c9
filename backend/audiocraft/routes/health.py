"""
AudioCraft Backend: Health Check Route
======================================

What:  GET /api/health for load balancer and uptime probes.
How:   No dependencies to probe (the store is in-process), so a response at
       all means the process is up. No authentication.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from audiocraft.config import settings
from audiocraft.schemas.common import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
    )
