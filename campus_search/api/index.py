"""Search index management endpoints."""

import time

from fastapi import APIRouter, Depends

from ..models.response import IndexRefreshResponse
from ..service_instance import get_search_service
from ..services import SearchService

router = APIRouter(prefix="/api/v1", tags=["index"])


@router.post(
    "/index/refresh",
    response_model=IndexRefreshResponse,
    summary="Reload the search index",
    description="Fetch the lightweight index from the backend, falling back to the cache"
)
async def refresh_index(service: SearchService = Depends(get_search_service)) -> IndexRefreshResponse:
    start_time = time.time()
    source = await service.load_index()
    
    return IndexRefreshResponse(
        source=source,
        total_records=len(service.records),
        execution_time_ms=(time.time() - start_time) * 1000
    )


@router.get(
    "/index/stats",
    summary="Index statistics",
    description="Get search index and request statistics"
)
async def index_stats(service: SearchService = Depends(get_search_service)) -> dict:
    return service.get_stats()
