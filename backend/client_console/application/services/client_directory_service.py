"""Application service (use case) for the client directory.

All reads go through the shared QueryCache; every successful write
invalidates the whole ``clients`` collection before returning. Activities,
common queries and error logs only share in-flight loads and are re-read
every time.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from client_console.application.interfaces import RecordStore, Row
from client_console.application.services.query_builder import (
    DETAIL_PAGE_SIZE,
    build_client_query,
    build_dependent_query,
    normalize_request,
)
from client_console.application.services.query_cache import CacheKey, QueryCache
from client_console.application.services.record_mapping import (
    activity_from_row,
    client_from_row,
    error_log_from_row,
    query_from_row,
)
from client_console.domain.entities import (
    Client,
    ClientActivity,
    ClientStatus,
    Collection,
    CommonQuery,
    DirectoryRequest,
    ErrorLog,
    RecordFilter,
    ResultPage,
    required_field_errors,
)
from client_console.domain.exceptions import EntityNotFoundError, ValidationError
from client_console.infrastructure.logging.colored_logger import SyncLogger, SyncStage

logger = logging.getLogger(__name__)
plog = SyncLogger("ClientDirectoryService")

T = TypeVar("T")

CLIENTS = Collection.CLIENTS.value


class ClientDirectoryService:
    """Orchestrates cached reads and invalidating writes. Depends on the store port (DI)."""

    def __init__(self, store: RecordStore, cache: QueryCache, page_size: int = 10):
        self._store = store
        self._cache = cache
        self._page_size = page_size

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def page_size(self) -> int:
        return self._page_size

    def default_request(self) -> DirectoryRequest:
        return DirectoryRequest(page_size=self._page_size)

    def request(self, search_text: str | None = None, sort_field: Any = None,
                page: int | None = None, page_size: int | None = None) -> DirectoryRequest:
        return normalize_request(
            search_text, sort_field, page, page_size, default_page_size=self._page_size
        )

    # ── Reads ────────────────────────────────────────────────────────

    async def list_clients(self, request: DirectoryRequest | None = None) -> ResultPage[Client]:
        """One page of the directory for the given search/sort/page."""
        request = request or self.default_request()
        key = CacheKey(CLIENTS, request.cache_params())

        async def load() -> ResultPage[Client]:
            descriptor = build_client_query(request)
            with plog.timed_step(
                SyncStage.STORE_READ, "Listing clients",
                search=request.search_text or "-", sort=request.sort_field.value, page=request.page,
            ):
                rows = await self._store.read(
                    descriptor.collection,
                    descriptor.filter,
                    descriptor.sort,
                    descriptor.range_start,
                    descriptor.range_end,
                )
                total = await self._store.count(descriptor.collection, descriptor.filter)
            return ResultPage(
                rows=[client_from_row(row) for row in rows],
                total=total,
                page=request.page,
                page_size=request.page_size,
            )

        return await self._cached(key, load)

    async def find_client(self, client_id: str) -> Client | None:
        """By-key read; None when no such client exists."""
        key = CacheKey(CLIENTS, ("by_key", client_id))

        async def load() -> Client | None:
            with plog.timed_step(SyncStage.STORE_READ, "Reading client", id=client_id):
                row = await self._store.read_by_key(CLIENTS, client_id)
            return client_from_row(row) if row is not None else None

        return await self._cached(key, load)

    async def get_client(self, client_id: str) -> Client:
        client = await self.find_client(client_id)
        if client is None:
            raise EntityNotFoundError("Client", client_id)
        return client

    async def list_activities(self, client_id: str, limit: int = DETAIL_PAGE_SIZE) -> list[ClientActivity]:
        rows = await self._dependent_rows(Collection.CLIENT_ACTIVITIES, client_id, limit)
        return [activity_from_row(row) for row in rows]

    async def list_common_queries(self, client_id: str, limit: int = DETAIL_PAGE_SIZE) -> list[CommonQuery]:
        rows = await self._dependent_rows(Collection.COMMON_QUERIES, client_id, limit)
        return [query_from_row(row) for row in rows]

    async def list_error_logs(self, client_id: str, limit: int = DETAIL_PAGE_SIZE) -> list[ErrorLog]:
        rows = await self._dependent_rows(Collection.ERROR_LOGS, client_id, limit)
        return [error_log_from_row(row) for row in rows]

    async def get_stats(self) -> dict[str, int]:
        """Client counts for the dashboard cards."""
        key = CacheKey(CLIENTS, ("stats",))

        async def load() -> dict[str, int]:
            with plog.timed_step(SyncStage.STORE_READ, "Counting clients"):
                total = await self._store.count(CLIENTS, RecordFilter())
                active = await self._store.count(
                    CLIENTS, RecordFilter(equals=(("status", ClientStatus.ACTIVE.value),))
                )
            return {"total": total, "active": active, "inactive": total - active}

        return await self._cached(key, load)

    # ── Writes ───────────────────────────────────────────────────────

    async def create_client(self, payload: Row) -> Client:
        """Insert a new client from a full-record payload."""
        self._validate(payload)
        with plog.timed_step(SyncStage.STORE_WRITE, "Inserting client", name=payload.get("name")):
            row = await self._store.insert(CLIENTS, dict(payload))
        self._invalidate_clients()
        return client_from_row(row)

    async def update_client(self, client_id: str, payload: Row) -> Client:
        """Overwrite an existing client. Raises EntityNotFoundError if it is gone."""
        self._validate(payload)
        record = {k: v for k, v in payload.items() if k not in ("id", "created_at")}
        with plog.timed_step(SyncStage.STORE_WRITE, "Updating client", id=client_id):
            row = await self._store.update_by_key(CLIENTS, client_id, record)
        self._invalidate_clients()
        return client_from_row(row)

    async def upsert_client(self, client_id: str | None, payload: Row) -> Client:
        """Insert or update depending on whether ``client_id`` is known to the store."""
        self._validate(payload)
        with plog.timed_step(SyncStage.STORE_WRITE, "Upserting client", id=client_id or "-"):
            row = await self._store.upsert_by_key(CLIENTS, client_id, dict(payload))
        self._invalidate_clients()
        return client_from_row(row)

    async def delete_client(self, client_id: str) -> None:
        """Permanently delete a client. Raises EntityNotFoundError if it was already gone.

        Dependent activities, queries and error logs are left to the store.
        """
        with plog.timed_step(SyncStage.STORE_WRITE, "Deleting client", id=client_id):
            deleted = await self._store.delete_by_key(CLIENTS, client_id)
        # Invalidate either way; a missing row means our cached view was already stale
        self._invalidate_clients()
        if not deleted:
            raise EntityNotFoundError("Client", client_id)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _cached(self, key: CacheKey, loader: Callable[[], Awaitable[T]], *, keep: bool = True) -> T:
        if self._cache.is_fresh(key):
            plog.step_start(SyncStage.CACHE_HIT, f"Serving {key.collection} from cache", params=key.params)
        else:
            plog.step_start(SyncStage.CACHE_MISS, f"Loading {key.collection}", params=key.params)
        result = await self._cache.get_or_load(key, loader, keep=keep)
        stats = self._cache.stats
        plog.stats(hits=stats.hits, misses=stats.misses, coalesced=stats.coalesced)
        return result

    async def _dependent_rows(self, collection: Collection, client_id: str, limit: int) -> list[Row]:
        descriptor = build_dependent_query(collection, client_id, limit)
        key = CacheKey(descriptor.collection, ("client", client_id, descriptor.limit))

        async def load() -> list[Row]:
            with plog.timed_step(SyncStage.STORE_READ, f"Reading {descriptor.collection}", client_id=client_id):
                return await self._store.read(
                    descriptor.collection,
                    descriptor.filter,
                    descriptor.sort,
                    descriptor.range_start,
                    descriptor.range_end,
                )

        # Written by other processes, so never kept past the in-flight load
        return await self._cached(key, load, keep=False)

    def _validate(self, payload: Row) -> None:
        errors = required_field_errors(payload)
        if errors:
            logger.info("Rejected client payload: %s", ", ".join(sorted(errors)))
            raise ValidationError(errors)

    def _invalidate_clients(self) -> None:
        marked = self._cache.invalidate(CLIENTS)
        plog.step_complete(SyncStage.INVALIDATE, "Client views marked stale", entries=marked)
