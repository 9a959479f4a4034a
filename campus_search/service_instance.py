"""Global search service instance to avoid circular imports."""

from .config import get_settings
from .services import SearchService, build_search_service

# Global search service instance
settings = get_settings()
search_service = build_search_service(settings)


def get_search_service() -> SearchService:
    """FastAPI dependency returning the global search service."""
    return search_service
