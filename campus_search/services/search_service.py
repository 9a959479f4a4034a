"""Search page controller: index lifecycle, ranking and hydration."""

import math
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import structlog

from ..client.backend import BackendClient
from ..config import Settings
from ..core.cache import SearchIndexCache, build_cache
from ..core.debounce import Debouncer
from ..core.hydrator import CancelToken, HydratedPage, ResultHydrator, filter_ids
from ..core.matcher import MultiTierMatcher
from ..core.normalizer import TextNormalizer
from ..exceptions import BackendError
from ..models.response import SearchPage
from ..models.restaurant import SECTIONS, allowed_types, resolve_category
from ..models.search import SearchRecord

logger = structlog.get_logger(__name__)


class SearchService:
    """
    Owns the in-memory search index and serves ranked, hydrated pages.
    
    The index is loaded once and replaced wholesale on reload. Until the
    first load attempt finishes every keyword search is empty.
    """
    
    def __init__(
        self,
        backend: BackendClient,
        cache: SearchIndexCache,
        matcher: Optional[MultiTierMatcher] = None,
        default_page_size: int = 10,
        prefer_cache: bool = False,
        debounce_seconds: float = 0.3
    ) -> None:
        self.backend = backend
        self.cache = cache
        self.matcher = matcher or MultiTierMatcher()
        self.hydrator = ResultHydrator(backend.fetch_by_ids)
        self.default_page_size = default_page_size
        self.prefer_cache = prefer_cache
        self.debounce_seconds = debounce_seconds
        
        self._records: Tuple[SearchRecord, ...] = ()
        self._index_loaded = False
        self._index_source = "none"
        self._current_token: Optional[CancelToken] = None
        self._stats = {
            "total_searches": 0,
            "browse_requests": 0,
            "degraded_pages": 0,
            "index_loads": 0,
            "index_load_failures": 0,
        }
    
    @property
    def records(self) -> Tuple[SearchRecord, ...]:
        return self._records
    
    @property
    def index_loaded(self) -> bool:
        return self._index_loaded
    
    @property
    def index_source(self) -> str:
        return self._index_source
    
    async def load_index(self) -> str:
        """
        Load the search index from the network, falling back to the cache.
        
        Returns:
            Where the index now comes from: "network", "cache" or "none"
        """
        self._stats["index_loads"] += 1
        try:
            if self.prefer_cache:
                cached = self.cache.read_cache()
                if cached is not None:
                    self._replace_index(cached, "cache")
                    return self._index_source
            
            try:
                records = await self.backend.fetch_search_data()
            except BackendError as e:
                self._stats["index_load_failures"] += 1
                logger.error("Failed to load search index", error=str(e))
                cached = self.cache.read_cache()
                if cached is not None:
                    self._replace_index(cached, "cache")
                elif not self._records:
                    self._index_source = "none"
                return self._index_source
            
            self._replace_index(records, "network")
            self.cache.write_cache(records)
            return self._index_source
        finally:
            self._index_loaded = True
    
    def _replace_index(self, records: List[SearchRecord], source: str) -> None:
        self._records = tuple(records)
        self._index_source = source
        logger.info("Search index loaded", source=source, total_records=len(records))
    
    def ranked_ids(
        self,
        keyword: str,
        category: Optional[str] = None,
        section: Optional[str] = None
    ) -> List[str]:
        """
        Rank the index for a keyword and apply the category filter.
        
        Raises:
            KeyError: If the section is not known
        """
        allowed = allowed_types(category, section)
        if not self._index_loaded:
            return []
        ordered_ids = self.matcher.search(keyword, self._records)
        return filter_ids(ordered_ids, self._records, allowed)
    
    def create_debouncer(self, callback: Callable[..., Any]) -> Debouncer:
        """Debounce keyword input with the configured quiet period."""
        return Debouncer(callback, wait=self.debounce_seconds)
    
    def begin_request(self) -> CancelToken:
        """Start a new request, cancelling the one it supersedes."""
        if self._current_token is not None:
            self._current_token.cancel()
        self._current_token = CancelToken()
        return self._current_token
    
    async def search_page(
        self,
        keyword: str,
        page: int = 1,
        page_size: Optional[int] = None,
        category: Optional[str] = None,
        section: Optional[str] = None,
        token: Optional[CancelToken] = None
    ) -> Optional[SearchPage]:
        """
        Serve one page of results.
        
        With a keyword the local index is ranked and only the page window is
        fetched by id. Without one the backend paginates directly.
        
        Returns:
            The page, or None if ``token`` was cancelled before completion
            
        Raises:
            KeyError: If the section is not known
        """
        start_time = time.time()
        keyword = (keyword or "").strip()
        page_size = page_size or self.default_page_size
        allowed = allowed_types(category, section)
        
        if keyword:
            self._stats["total_searches"] += 1
            hydrated = await self._search(keyword, page, page_size, allowed, token)
        else:
            self._stats["browse_requests"] += 1
            hydrated = await self._browse(page, page_size, category, section, token)
        
        if hydrated is None:
            return None
        if hydrated.degraded:
            self._stats["degraded_pages"] += 1
        
        return SearchPage(
            keyword=keyword,
            items=hydrated.items,
            total=hydrated.total,
            page=page,
            page_size=page_size,
            pages=math.ceil(hydrated.total / page_size),
            degraded=hydrated.degraded,
            execution_time_ms=(time.time() - start_time) * 1000
        )
    
    async def _search(self, keyword, page, page_size, allowed, token) -> Optional[HydratedPage]:
        if not self._index_loaded:
            return HydratedPage(items=[], total=0)
        ordered_ids = self.matcher.search(keyword, self._records)
        return await self.hydrator.hydrate(
            ordered_ids, self._records, page, page_size, allowed, token
        )
    
    async def _browse(self, page, page_size, category, section, token) -> Optional[HydratedPage]:
        selected = resolve_category(category)
        types = None
        if selected is None and section:
            types = [rtype.value for rtype in SECTIONS[section]]
        
        try:
            items, total = await self.backend.fetch_page(page, page_size, type=selected, types=types)
        except BackendError as e:
            if token is not None and token.cancelled:
                return None
            logger.error("Failed to load listing page", error=str(e), page=page)
            return HydratedPage(items=[], total=0, degraded=True)
        
        if token is not None and token.cancelled:
            return None
        return HydratedPage(items=items, total=total)
    
    def get_stats(self) -> Dict[str, object]:
        """Get service statistics."""
        stats = dict(self._stats)
        stats["index_loaded"] = self._index_loaded
        stats["index_source"] = self._index_source
        stats["total_records"] = len(self._records)
        return stats
    
    async def aclose(self) -> None:
        await self.backend.aclose()


def build_search_service(settings: Settings) -> SearchService:
    """Wire a search service from application settings."""
    backend = BackendClient(
        settings.backend_base_url,
        entity=settings.backend_entity,
        timeout=settings.request_timeout
    )
    matcher = MultiTierMatcher(
        normalizer=TextNormalizer(similarity_threshold=settings.homophone_similarity),
        fuzzy_threshold=settings.fuzzy_threshold
    )
    return SearchService(
        backend,
        build_cache(settings),
        matcher=matcher,
        default_page_size=settings.default_page_size,
        prefer_cache=settings.index_prefer_cache,
        debounce_seconds=settings.debounce_seconds
    )
