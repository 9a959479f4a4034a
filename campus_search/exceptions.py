"""Exception hierarchy for the campus search service."""

from typing import Optional


class CampusSearchError(Exception):
    """Base class for all campus search errors."""


class BackendError(CampusSearchError):
    """Raised when the upstream campus backend cannot serve a request."""
    
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CacheError(CampusSearchError):
    """Raised by storage backends; never escapes the search index cache."""
