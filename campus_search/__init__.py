"""
Campus Search - multi-strategy restaurant search for the campus services app.

Matches keywords against a cached lightweight index by literal substring,
pinyin, homophone and fuzzy similarity, then hydrates ranked pages of full
records from the campus backend.
"""

__version__ = "1.0.0"

from .core.cache import get_cached_search_data, set_cached_search_data
from .core.matcher import MultiTierMatcher, search
from .models.search import SearchRecord

__all__ = [
    "MultiTierMatcher",
    "SearchRecord",
    "get_cached_search_data",
    "search",
    "set_cached_search_data",
]
