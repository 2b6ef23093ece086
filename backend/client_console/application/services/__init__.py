from .client_directory_service import ClientDirectoryService
from .query_builder import build_client_query, build_dependent_query, normalize_request
from .query_cache import CacheKey, CacheStats, QueryCache

__all__ = [
    "ClientDirectoryService",
    "build_client_query",
    "build_dependent_query",
    "normalize_request",
    "CacheKey",
    "CacheStats",
    "QueryCache",
]
