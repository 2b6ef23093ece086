"""Integration tests for SQLAlchemyRecordStore against a file-backed SQLite database."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from client_console.application.services import ClientDirectoryService, QueryCache
from client_console.domain.entities import RecordFilter, SortOrder
from client_console.domain.exceptions import EntityNotFoundError, StoreError
from client_console.infrastructure.database import build_session_factory, create_tables
from client_console.infrastructure.database.repositories import SQLAlchemyRecordStore

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def sqlite_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'console.db'}")
    await create_tables(engine)
    yield SQLAlchemyRecordStore(build_session_factory(engine))
    await engine.dispose()


async def _insert_client(store, name: str, minutes_ago: int, **extra) -> dict:
    stamp = NOW - timedelta(minutes=minutes_ago)
    return await store.insert(
        "clients",
        {"name": name, "agent_name": "Bot", "created_at": stamp, "updated_at": stamp, **extra},
    )


@pytest.mark.asyncio
async def test_insert_assigns_id_and_defaults(sqlite_store):
    row = await sqlite_store.insert("clients", {"name": "Acme", "agent_name": "Bot1", "unknown": "x"})

    assert row["id"]
    assert row["status"] == "active"
    assert row["google_drive_links"] == []
    assert row["created_at"] is not None
    assert "unknown" not in row


@pytest.mark.asyncio
async def test_read_sorts_and_slices_inclusive_range(sqlite_store):
    for i, name in enumerate(["Delta", "Alpha", "Charlie", "Bravo"]):
        await _insert_client(sqlite_store, name, minutes_ago=i)

    by_name = await sqlite_store.read("clients", RecordFilter(), SortOrder("name"), 1, 2)
    by_recency = await sqlite_store.read(
        "clients", RecordFilter(), SortOrder("updated_at", descending=True), 0, 1
    )

    assert [r["name"] for r in by_name] == ["Bravo", "Charlie"]
    assert [r["name"] for r in by_recency] == ["Delta", "Alpha"]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_across_fields(sqlite_store):
    await _insert_client(sqlite_store, "Acme Corp", 0)
    await _insert_client(sqlite_store, "Northwind", 1, email="ops@ACME.test")
    await _insert_client(sqlite_store, "Contoso", 2, company="acme holdings")
    await _insert_client(sqlite_store, "Globex", 3, description="acme")
    search = RecordFilter(search_text="AcMe", search_fields=("name", "email", "company"))

    rows = await sqlite_store.read("clients", search, SortOrder("name"), 0, 9)

    assert [r["name"] for r in rows] == ["Acme Corp", "Contoso", "Northwind"]
    assert await sqlite_store.count("clients", search) == 3
    assert await sqlite_store.count("clients", RecordFilter()) == 4


@pytest.mark.asyncio
async def test_search_treats_like_wildcards_literally(sqlite_store):
    await _insert_client(sqlite_store, "100% Organic", 0)
    await _insert_client(sqlite_store, "1000 Lakes", 1)

    rows = await sqlite_store.read(
        "clients", RecordFilter(search_text="0%", search_fields=("name",)), SortOrder("name"), 0, 9
    )

    assert [r["name"] for r in rows] == ["100% Organic"]


@pytest.mark.asyncio
async def test_equality_filter_scopes_dependent_rows(sqlite_store):
    await sqlite_store.insert("error_logs", {"client_id": "c1", "error_type": "timeout", "message": "a"})
    await sqlite_store.insert("error_logs", {"client_id": "c2", "error_type": "auth", "message": "b"})

    rows = await sqlite_store.read(
        "error_logs",
        RecordFilter(equals=(("client_id", "c1"),)),
        SortOrder("created_at", descending=True),
        0,
        4,
    )

    assert [r["error_type"] for r in rows] == ["timeout"]


@pytest.mark.asyncio
async def test_update_delete_and_missing_keys(sqlite_store):
    row = await _insert_client(sqlite_store, "Acme", 0)

    updated = await sqlite_store.update_by_key(
        "clients", row["id"], {"name": "Acme 2", "website_urls": ["https://acme.test"]}
    )
    assert updated["name"] == "Acme 2"
    assert (await sqlite_store.read_by_key("clients", row["id"]))["website_urls"] == ["https://acme.test"]

    with pytest.raises(EntityNotFoundError):
        await sqlite_store.update_by_key("clients", "missing", {"name": "x"})

    assert await sqlite_store.delete_by_key("clients", row["id"]) is True
    assert await sqlite_store.delete_by_key("clients", row["id"]) is False
    assert await sqlite_store.read_by_key("clients", row["id"]) is None


@pytest.mark.asyncio
async def test_upsert_inserts_with_given_key_then_updates(sqlite_store):
    inserted = await sqlite_store.upsert_by_key("clients", "fixed-id", {"name": "Acme", "agent_name": "Bot"})
    updated = await sqlite_store.upsert_by_key("clients", "fixed-id", {"name": "Acme 2", "agent_name": "Bot"})

    assert inserted["id"] == updated["id"] == "fixed-id"
    assert await sqlite_store.count("clients", RecordFilter()) == 1


@pytest.mark.asyncio
async def test_unknown_field_or_collection_raises_store_error(sqlite_store):
    with pytest.raises(StoreError):
        await sqlite_store.read("clients", RecordFilter(), SortOrder("nope"), 0, 9)
    with pytest.raises(StoreError):
        await sqlite_store.count("invoices", RecordFilter())


@pytest.mark.asyncio
async def test_constraint_violation_surfaces_as_store_error(sqlite_store):
    with pytest.raises(StoreError):
        await sqlite_store.insert("clients", {"agent_name": "Bot"})


@pytest.mark.asyncio
async def test_service_over_sqlite_end_to_end(sqlite_store):
    service = ClientDirectoryService(sqlite_store, QueryCache())
    await _insert_client(sqlite_store, "Acme Corp", 60)
    await _insert_client(sqlite_store, "Beta LLC", 1)

    page = await service.list_clients()
    assert [c.name for c in page.rows] == ["Beta LLC", "Acme Corp"]
    assert page.rows[0].updated_at.tzinfo is not None

    await service.delete_client(page.rows[0].id)

    page = await service.list_clients()
    assert [c.name for c in page.rows] == ["Acme Corp"]
