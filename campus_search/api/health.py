"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..models.response import HealthResponse
from ..service_instance import get_search_service
from ..services import SearchService

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the search service"
)
async def health_check(service: SearchService = Depends(get_search_service)) -> HealthResponse:
    """
    Report service health.
    
    The search index is degraded while it is empty or served from the cache
    after a failed network load.
    """
    dependencies = {
        "matcher": "healthy",
        "search_index": "healthy",
        "cache": "healthy" if service.cache.storage is not None else "disabled",
    }
    
    try:
        service.matcher.search("health", service.records[:1])
    except Exception:
        dependencies["matcher"] = "unhealthy"
    
    if not service.index_loaded or not service.records:
        dependencies["search_index"] = "degraded"
    elif service.index_source != "network":
        dependencies["search_index"] = "degraded"
    
    if any(status == "unhealthy" for status in dependencies.values()):
        status = "unhealthy"
    elif any(status == "degraded" for status in dependencies.values()):
        status = "degraded"
    else:
        status = "healthy"
    
    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=time.time() - app_start_time,
        dependencies=dependencies
    )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the search index has been loaded"
)
async def readiness_check(service: SearchService = Depends(get_search_service)) -> JSONResponse:
    """Ready once the first index load attempt has finished."""
    if not service.index_loaded:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "timestamp": datetime.utcnow().isoformat()
            }
        )
    
    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": datetime.utcnow().isoformat(),
            "index_stats": service.get_stats()
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )
