"""
Health Check Router - Stock Health Score
healthscore/routers/health.py

Returns health status of the service dependencies with real connection checks.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

import redis

from healthscore.config import settings

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


def _short(e: Exception) -> str:
    msg = str(e)
    return msg[:100] + "..." if len(msg) > 100 else msg


def check_redis() -> str:
    """Check Redis connection health."""
    try:
        client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
        client.ping()
        client.close()
        return "healthy"
    except (redis.RedisError, OSError) as e:
        return f"unhealthy: {_short(e)}"


def check_market_data() -> str:
    """Alpha Vantage is only checked for configuration, not called (rate limits)."""
    if settings.ALPHA_VANTAGE_KEY is None:
        return "unhealthy: ALPHA_VANTAGE_KEY not configured"
    return "healthy (configured)"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Health check",
    description="Check health of all dependencies.",
)
def health_check():
    """Check health of all dependencies."""
    dependencies = {
        "redis": check_redis(),
        "alpha_vantage": check_market_data(),
    }

    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
