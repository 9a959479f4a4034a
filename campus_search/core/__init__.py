"""Core search functionality."""

from .cache import SearchIndexCache, get_cached_search_data, set_cached_search_data
from .debounce import Debouncer
from .hydrator import CancelToken, ResultHydrator
from .matcher import MultiTierMatcher, search
from .normalizer import TextNormalizer, approximately_equal, edit_distance, to_comparable_form

__all__ = [
    "CancelToken",
    "Debouncer",
    "MultiTierMatcher",
    "ResultHydrator",
    "SearchIndexCache",
    "TextNormalizer",
    "approximately_equal",
    "edit_distance",
    "get_cached_search_data",
    "search",
    "set_cached_search_data",
    "to_comparable_form",
]
