"""Health check endpoint — never touches the record store."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from client_console.application.services import QueryCache
from client_console.config import get_settings
from client_console.infrastructure.dependencies import get_query_cache

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(cache: QueryCache = Depends(get_query_cache)) -> dict:
    """Returns the application status plus query-cache counters."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "cache": {"entries": len(cache), **asdict(cache.stats)},
    }
