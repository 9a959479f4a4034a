"""Data models for the campus search service."""

from .restaurant import (
    RESTAURANT_TYPE_LABELS,
    SECTIONS,
    Restaurant,
    RestaurantType,
    allowed_types,
    resolve_category,
)
from .response import (
    ErrorResponse,
    HealthResponse,
    IndexRefreshResponse,
    RankedIdsResponse,
    SearchPage,
)
from .search import ApiEnvelope, CacheEnvelope, ScoredMatch, SearchRecord

__all__ = [
    "ApiEnvelope",
    "CacheEnvelope",
    "ErrorResponse",
    "HealthResponse",
    "IndexRefreshResponse",
    "RankedIdsResponse",
    "RESTAURANT_TYPE_LABELS",
    "Restaurant",
    "RestaurantType",
    "SECTIONS",
    "ScoredMatch",
    "SearchPage",
    "SearchRecord",
    "allowed_types",
    "resolve_category",
]
