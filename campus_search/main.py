"""Main FastAPI application for Campus Search."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import health_router, index_router, search_router
from .config import get_settings
from .models.response import ErrorResponse
from .service_instance import search_service

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Campus Search service", version=settings.app_version)
    
    source = await search_service.load_index()
    logger.info(
        "Search index ready",
        source=source,
        total_records=len(search_service.records)
    )
    
    yield
    
    # Shutdown
    await search_service.aclose()
    logger.info("Shutting down Campus Search service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Chinese, pinyin, homophone and fuzzy search over campus restaurants",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()
    
    response = await call_next(request)
    
    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )
    
    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )
    
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(search_router)
app.include_router(index_router)
app.include_router(health_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Chinese, pinyin, homophone and fuzzy search over campus restaurants",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "search": "/api/v1/search?q=keyword&category=drinks&page=1",
            "ranked_ids": "/api/v1/search/ids?q=keyword",
            "refresh_index": "/api/v1/index/refresh",
            "index_stats": "/api/v1/index/stats",
            "health": "/api/v1/health"
        },
        "features": [
            "Literal substring matching on name, location, tags and menu",
            "Pinyin and initials matching for Chinese text",
            "Homophone matching",
            "Weighted fuzzy fallback",
            "Category and section filtering in relevance order",
            "Versioned search index cache"
        ],
        "limits": {
            "max_query_length": settings.max_query_length,
            "default_page_size": settings.default_page_size,
            "max_page_size": settings.max_page_size
        }
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "campus_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
