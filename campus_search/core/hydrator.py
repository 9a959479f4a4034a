"""Resolve ranked record ids into a page of full records."""

from dataclasses import dataclass
from typing import Awaitable, Callable, FrozenSet, List, NamedTuple, Optional, Sequence

import structlog

from ..exceptions import BackendError
from ..models.restaurant import Restaurant
from ..models.search import SearchRecord

logger = structlog.get_logger(__name__)

FetchByIds = Callable[[Sequence[str]], Awaitable[List[Restaurant]]]


@dataclass
class CancelToken:
    """Marks a request whose late result must be ignored."""
    
    cancelled: bool = False
    
    def cancel(self) -> None:
        self.cancelled = True


class HydratedPage(NamedTuple):
    """Full records for one page window plus the pre-pagination total."""
    
    items: List[Restaurant]
    total: int
    degraded: bool = False


def filter_ids(
    ordered_ids: Sequence[str],
    records: Sequence[SearchRecord],
    allowed_types: Optional[FrozenSet[str]]
) -> List[str]:
    """
    Keep only ids whose record type is allowed, preserving ranked order.
    
    Args:
        ordered_ids: Ranked ids from the matcher
        records: The search index the ids came from
        allowed_types: Permitted record types, or None for no restriction
    """
    if allowed_types is None:
        return list(ordered_ids)
    permitted = {record.id for record in records if record.type in allowed_types}
    return [record_id for record_id in ordered_ids if record_id in permitted]


def page_window(ids: Sequence[str], page: int, page_size: int) -> List[str]:
    """Slice the 1-based ``page`` of ``page_size`` ids."""
    if page < 1 or page_size < 1:
        return []
    start = (page - 1) * page_size
    return list(ids[start:start + page_size])


def reorder(window: Sequence[str], fetched: Sequence[Restaurant]) -> List[Restaurant]:
    """Emit fetched records in window order, dropping ids the server did not return."""
    by_id = {record.id: record for record in fetched}
    return [by_id[record_id] for record_id in window if record_id in by_id]


class ResultHydrator:
    """Turns ranked ids into displayable pages through a bulk id lookup."""
    
    def __init__(self, fetch_by_ids: FetchByIds) -> None:
        self.fetch_by_ids = fetch_by_ids
    
    async def hydrate(
        self,
        ordered_ids: Sequence[str],
        records: Sequence[SearchRecord],
        page: int,
        page_size: int,
        allowed_types: Optional[FrozenSet[str]] = None,
        token: Optional[CancelToken] = None
    ) -> Optional[HydratedPage]:
        """
        Hydrate one page of ranked results.
        
        Args:
            ordered_ids: Ranked ids from the matcher
            records: Search index used for category filtering
            page: 1-based page number
            page_size: Number of records per page
            allowed_types: Category restriction, or None
            token: Cancellation token for this request
            
        Returns:
            The hydrated page, or None if the request was cancelled while
            the fetch was in flight
        """
        filtered = filter_ids(ordered_ids, records, allowed_types)
        window = page_window(filtered, page, page_size)
        
        if not window:
            return HydratedPage(items=[], total=len(filtered))
        
        try:
            fetched = await self.fetch_by_ids(window)
        except BackendError as e:
            if token is not None and token.cancelled:
                return None
            logger.error(
                "Failed to hydrate search results",
                error=str(e),
                page=page,
                requested=len(window)
            )
            return HydratedPage(items=[], total=0, degraded=True)
        
        if token is not None and token.cancelled:
            return None
        
        return HydratedPage(items=reorder(window, fetched), total=len(filtered))
