"""Application settings and configuration management."""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    # Application
    app_name: str = Field(default="Campus Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    
    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)
    
    # Upstream campus backend
    backend_base_url: str = Field(default="http://localhost:3000/api")
    backend_entity: str = Field(default="restaurants")
    request_timeout: float = Field(default=30.0)
    
    # Search index cache
    cache_backend: Literal["file", "memory", "none"] = Field(default="file")
    cache_dir: str = Field(default=".campus_search_cache")
    cache_key_prefix: str = Field(default="hubu_restaurants_search_data")
    index_prefer_cache: bool = Field(default=False)
    
    # Matching
    homophone_similarity: float = Field(default=0.7, ge=0.0, le=1.0)
    fuzzy_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    max_query_length: int = Field(default=100)
    debounce_seconds: float = Field(default=0.3)
    
    # Pagination
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=100)
    
    # Logging
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")
    
    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"]
    )
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
