"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .restaurant import Restaurant


class SearchPage(BaseModel):
    """One displayable page of hydrated search results."""
    
    keyword: str = Field(..., description="Keyword the page was searched with")
    items: List[Restaurant] = Field(..., description="Full records in ranked order")
    total: int = Field(..., description="Total matching records across all pages")
    page: int = Field(..., description="1-based page number")
    page_size: int = Field(..., description="Requested page size")
    pages: int = Field(..., description="Total number of pages")
    degraded: bool = Field(False, description="Whether the backend failed and the page is empty")
    execution_time_ms: float = Field(0.0, description="Time spent serving the page")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class RankedIdsResponse(BaseModel):
    """Ranked record ids for a keyword, without hydration."""
    
    keyword: str = Field(..., description="Original keyword")
    ids: List[str] = Field(..., description="Record ids, most relevant first")
    total: int = Field(..., description="Number of ids")
    index_loaded: bool = Field(..., description="Whether the search index has been loaded")
    execution_time_ms: float = Field(..., description="Matching time in milliseconds")


class IndexRefreshResponse(BaseModel):
    """Outcome of (re)loading the search index."""
    
    source: str = Field(..., description="Where the index came from: network, cache or none")
    total_records: int = Field(..., description="Number of records now held in memory")
    execution_time_ms: float = Field(..., description="Load time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class ErrorResponse(BaseModel):
    """Error response model."""
    
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")
