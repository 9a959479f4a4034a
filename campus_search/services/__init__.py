"""Application services composing the search core."""

from .search_service import SearchService, build_search_service

__all__ = ["SearchService", "build_search_service"]
