"""Search index data models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchRecord(BaseModel):
    """Lightweight, client-cached projection of a restaurant used for matching."""
    
    model_config = ConfigDict(populate_by_name=True, frozen=True)
    
    id: str = Field(..., description="Stable join key to the full record")
    name: str = Field(default="", description="Display name, primary match field")
    type: str = Field(default="", description="Category value, used for post-filtering")
    location_description: str = Field(
        default="", alias="locationDescription", description="Free-text location hint"
    )
    tags: List[str] = Field(default_factory=list, description="Short descriptive tags")
    menu_text: str = Field(default="", alias="menuText", description="Free-text menu block")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept integer ids from the backend."""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("name", "type", "location_description", "menu_text", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Missing optional text fields are treated as empty strings."""
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v


class ScoredMatch(BaseModel):
    """Ephemeral relevance score for one record within one search call."""
    
    id: str
    score: int = Field(..., ge=0, le=100)


class CacheEnvelope(BaseModel):
    """Versioned wrapper persisted around the search record list."""
    
    version: str
    payload: List[SearchRecord]


class ApiEnvelope(BaseModel):
    """Standard response wrapper used by the campus backend."""
    
    model_config = ConfigDict(extra="allow")
    
    status: str
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
