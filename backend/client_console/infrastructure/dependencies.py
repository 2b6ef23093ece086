"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends

from client_console.application.interfaces import RecordStore
from client_console.application.services import ClientDirectoryService, QueryCache
from client_console.config import get_settings
from client_console.infrastructure.database.repositories import SQLAlchemyRecordStore
from client_console.infrastructure.database.session import async_session_factory


@lru_cache
def get_query_cache() -> QueryCache:
    """Process-wide query cache shared by every request."""
    return QueryCache()


@lru_cache
def get_record_store() -> RecordStore:
    """Record store opening one short-lived session per call."""
    return SQLAlchemyRecordStore(async_session_factory)


async def get_client_directory_service(
    store: RecordStore = Depends(get_record_store),
    cache: QueryCache = Depends(get_query_cache),
) -> AsyncGenerator[ClientDirectoryService, None]:
    """Provides a ClientDirectoryService bound to the shared store and cache."""
    settings = get_settings()
    yield ClientDirectoryService(store, cache, page_size=settings.directory_page_size)
