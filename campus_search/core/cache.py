"""Versioned client-side cache for the lightweight search index."""

import json
from functools import lru_cache
from typing import List, Optional, Sequence

import structlog
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..exceptions import CacheError
from ..models.search import CacheEnvelope, SearchRecord
from .storage import FileStorage, KeyValueStorage, MemoryStorage

logger = structlog.get_logger(__name__)

# Bump whenever the shape of SearchRecord changes
SEARCH_DATA_CACHE_VERSION = "1.0"


class SearchIndexCache:
    """
    Persists the search record list under a version marker.
    
    The cache is advisory: every failure is logged and reported as a miss.
    Without a storage backend reads return None and writes do nothing.
    """
    
    def __init__(
        self,
        storage: Optional[KeyValueStorage],
        key_prefix: str = "hubu_restaurants_search_data",
        version: str = SEARCH_DATA_CACHE_VERSION
    ) -> None:
        self.storage = storage
        self.version = version
        self.data_key = key_prefix
        self.version_key = f"{key_prefix}_version"
    
    def read_cache(self) -> Optional[List[SearchRecord]]:
        """
        Read the cached records.
        
        Returns:
            The cached records, or None if there is no storage, no or a
            stale version marker, no payload, or an unreadable payload
        """
        if self.storage is None:
            return None
        
        try:
            stored_version = self.storage.get_item(self.version_key)
            if stored_version is None:
                return None
            
            if stored_version != self.version:
                logger.info(
                    "Discarding stale search index cache",
                    stored_version=stored_version,
                    current_version=self.version
                )
                self.clear()
                return None
            
            raw = self.storage.get_item(self.data_key)
            if not raw:
                return None
            
            envelope = CacheEnvelope(version=stored_version, payload=json.loads(raw))
            return envelope.payload
            
        except (CacheError, ValueError, ValidationError) as e:
            # ValidationError is a ValueError; listed for readability
            logger.error("Failed to read search index cache", error=str(e))
            return None
    
    def write_cache(self, records: Sequence[SearchRecord]) -> None:
        """Store the records and the current version marker, never raising."""
        if self.storage is None:
            return
        
        try:
            payload = json.dumps(
                [record.model_dump(by_alias=True) for record in records],
                ensure_ascii=False
            )
            self.storage.set_item(self.data_key, payload)
            self.storage.set_item(self.version_key, self.version)
        except (CacheError, TypeError, ValueError) as e:
            logger.error(
                "Failed to write search index cache",
                error=str(e),
                total_records=len(records)
            )
    
    def clear(self) -> None:
        """Remove both cache entries."""
        if self.storage is None:
            return
        try:
            self.storage.remove_item(self.data_key)
            self.storage.remove_item(self.version_key)
        except CacheError as e:
            logger.error("Failed to clear search index cache", error=str(e))


def build_cache(settings: Settings) -> SearchIndexCache:
    """Create a cache backed by the storage configured in settings."""
    storage: Optional[KeyValueStorage]
    if settings.cache_backend == "file":
        storage = FileStorage(settings.cache_dir)
    elif settings.cache_backend == "memory":
        storage = MemoryStorage()
    else:
        storage = None
    return SearchIndexCache(storage, key_prefix=settings.cache_key_prefix)


@lru_cache()
def get_default_cache() -> SearchIndexCache:
    """Get the process-wide cache built from application settings."""
    return build_cache(get_settings())


def get_cached_search_data() -> Optional[List[SearchRecord]]:
    return get_default_cache().read_cache()


def set_cached_search_data(records: Sequence[SearchRecord]) -> None:
    get_default_cache().write_cache(records)
