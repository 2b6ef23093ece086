"""Shared fakes and fixtures for the unit tests."""

from collections import defaultdict
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from client_console.application.interfaces import Navigator, RecordStore, Row
from client_console.application.services import ClientDirectoryService, QueryCache
from client_console.domain.entities import RecordFilter, SortOrder
from client_console.domain.exceptions import EntityNotFoundError


class FakeRecordStore(RecordStore):
    """In-memory fake store for unit testing.

    ``fail_on`` maps an operation name (or ``"operation:collection"``) to
    the exception it should raise;
    ``before_read`` is awaited with the filter before every ``read`` so
    tests can hold individual reads open.
    """

    def __init__(self):
        self.tables: dict[str, dict[str, Row]] = defaultdict(dict)
        self.calls: list[tuple[str, str]] = []
        self.fail_on: dict[str, Exception] = {}
        self.before_read: Callable[[RecordFilter], Awaitable[None]] | None = None

    def call_count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)

    def seed(self, collection: str, **row) -> Row:
        row.setdefault("id", str(uuid4()))
        self.tables[collection][row["id"]] = dict(row)
        return row

    async def _enter(self, operation: str, collection: str) -> None:
        self.calls.append((operation, collection))
        exc = self.fail_on.get(f"{operation}:{collection}") or self.fail_on.get(operation)
        if exc is not None:
            raise exc

    async def read(self, collection, filter: RecordFilter, sort: SortOrder, range_start, range_end):
        await self._enter("read", collection)
        if self.before_read is not None:
            await self.before_read(filter)
        rows = [dict(r) for r in self.tables[collection].values() if filter.matches(r)]
        rows.sort(key=lambda r: r.get(sort.field), reverse=sort.descending)
        return rows[range_start : range_end + 1]

    async def count(self, collection, filter: RecordFilter) -> int:
        await self._enter("count", collection)
        return sum(1 for r in self.tables[collection].values() if filter.matches(r))

    async def read_by_key(self, collection, key):
        await self._enter("read_by_key", collection)
        row = self.tables[collection].get(key)
        return dict(row) if row is not None else None

    async def insert(self, collection, record):
        await self._enter("insert", collection)
        row = dict(record)
        row["id"] = row.get("id") or str(uuid4())
        now = datetime.now(timezone.utc)
        row.setdefault("created_at", now)
        row.setdefault("updated_at", now)
        self.tables[collection][row["id"]] = row
        return dict(row)

    async def update_by_key(self, collection, key, record):
        await self._enter("update_by_key", collection)
        existing = self.tables[collection].get(key)
        if existing is None:
            raise EntityNotFoundError(collection, key)
        existing.update({k: v for k, v in record.items() if k != "id"})
        return dict(existing)

    async def upsert_by_key(self, collection, key, record):
        await self._enter("upsert_by_key", collection)
        if key and key in self.tables[collection]:
            self.tables[collection][key].update(record)
            return dict(self.tables[collection][key])
        row = {**record, "id": key or str(uuid4())}
        self.tables[collection][row["id"]] = row
        return dict(row)

    async def delete_by_key(self, collection, key):
        await self._enter("delete_by_key", collection)
        return self.tables[collection].pop(key, None) is not None


class RecordingNavigator(Navigator):
    """Navigator that just remembers where it was sent."""

    def __init__(self):
        self.visits: list[tuple[str, str | None]] = []

    def to_directory(self) -> None:
        self.visits.append(("directory", None))

    def to_editor(self, client_id: str | None = None) -> None:
        self.visits.append(("editor", client_id))

    def to_detail(self, client_id: str) -> None:
        self.visits.append(("detail", client_id))

    @property
    def last(self) -> tuple[str, str | None] | None:
        return self.visits[-1] if self.visits else None


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def service(store: FakeRecordStore, cache: QueryCache) -> ClientDirectoryService:
    return ClientDirectoryService(store, cache, page_size=10)


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()
