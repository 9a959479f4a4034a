"""Search API endpoints."""

import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import get_settings
from ..models.response import RankedIdsResponse, SearchPage
from ..models.restaurant import SECTIONS
from ..service_instance import get_search_service
from ..services import SearchService

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()


def _validate(q: str, section: Optional[str]) -> None:
    if len(q) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )
    if section is not None and section not in SECTIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown section '{section}'. Expected one of: {', '.join(SECTIONS)}"
        )


@router.get(
    "/search",
    response_model=SearchPage,
    summary="Search restaurants",
    description="Rank the cached index for a keyword and return one hydrated page"
)
async def search_restaurants(
    q: str = Query("", description="Keyword; empty lists records without ranking"),
    category: Optional[str] = Query(None, description="Type value or display label"),
    section: Optional[str] = Query(None, description="Catalogue section: food or life"),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    service: SearchService = Depends(get_search_service)
) -> SearchPage:
    """
    Search restaurants by name, location, tags or menu.
    
    Keywords may be Chinese, pinyin, initials or approximate spellings.
    Results keep their relevance order across pages.
    """
    _validate(q, section)
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    
    return await service.search_page(
        q, page=page, page_size=page_size, category=category, section=section
    )


@router.get(
    "/search/ids",
    response_model=RankedIdsResponse,
    summary="Ranked ids",
    description="Return ranked record ids for a keyword without fetching full records"
)
async def search_ids(
    q: str = Query(..., description="Keyword"),
    category: Optional[str] = Query(None, description="Type value or display label"),
    section: Optional[str] = Query(None, description="Catalogue section: food or life"),
    service: SearchService = Depends(get_search_service)
) -> RankedIdsResponse:
    """Rank the index for a keyword; useful for client-side pagination."""
    _validate(q, section)
    start_time = time.time()
    ids = service.ranked_ids(q, category=category, section=section)
    
    return RankedIdsResponse(
        keyword=q.strip(),
        ids=ids,
        total=len(ids),
        index_loaded=service.index_loaded,
        execution_time_ms=(time.time() - start_time) * 1000
    )
