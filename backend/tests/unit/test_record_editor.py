"""Unit tests for RecordEditor and the ClientDraft it edits."""

import asyncio
from datetime import datetime, timezone

import pytest

from client_console.application.views import EditorMode, EditorStatus, RecordEditor
from client_console.domain.entities import ClientDraft, ClientStatus
from client_console.domain.exceptions import StoreError

FIXED = datetime(2026, 5, 4, 9, 30, tzinfo=timezone.utc)


def _clock() -> datetime:
    return FIXED


def _seed_client(store, **overrides) -> dict:
    row = {
        "name": "Acme",
        "agent_name": "Bot1",
        "email": "hello@acme.test",
        "google_drive_links": ["https://drive/a", "https://drive/b", "https://drive/c"],
        "website_urls": ["https://acme.test"],
        "status": "active",
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return store.seed("clients", **row)


# ── ClientDraft ──────────────────────────────────────────────────────


def test_draft_link_editing_by_index():
    draft = ClientDraft(google_drive_links=["a", "b"])

    index = draft.add_link("google_drive_links")
    draft.edit_link("google_drive_links", index, "c")
    removed = draft.remove_link("google_drive_links", 0)

    assert removed == "a"
    assert draft.google_drive_links == ["b", "c"]
    with pytest.raises(IndexError):
        draft.edit_link("website_urls", 0, "x")
    with pytest.raises(IndexError):
        draft.remove_link("google_drive_links", 5)


def test_draft_rejects_link_collections_through_set_field():
    draft = ClientDraft()
    with pytest.raises(AttributeError):
        draft.set_field("website_urls", ["x"])
    with pytest.raises(AttributeError):
        draft.set_field("nickname", "x")

    draft.set_field("status", "inactive")
    assert draft.status is ClientStatus.INACTIVE


def test_draft_payload_is_full_record_with_blank_optionals_as_none():
    draft = ClientDraft(name="  Acme ", agent_name="Bot1", email="")

    payload = draft.to_payload(FIXED, stamp_created=True)

    assert payload["name"] == "Acme"
    assert payload["email"] is None
    assert payload["google_drive_links"] == []
    assert payload["status"] == "active"
    assert payload["created_at"] == payload["updated_at"] == FIXED
    assert "created_at" not in draft.to_payload(FIXED)


# ── Create mode ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_submits_one_insert_and_returns_to_directory(service, store, navigator):
    editor = RecordEditor(service, navigator, clock=_clock)
    assert editor.mode == EditorMode.CREATE
    assert editor.status == EditorStatus.READY

    editor.draft.set_field("name", "Acme")
    editor.draft.set_field("agent_name", "Bot1")
    editor.draft.add_link("website_urls", "https://acme.test")

    assert await editor.submit() is True

    assert store.call_count("insert") == 1
    assert editor.status == EditorStatus.SAVED
    assert navigator.last == ("directory", None)
    stored = store.tables["clients"][editor.client_id]
    assert stored["created_at"] == stored["updated_at"] == FIXED
    assert stored["website_urls"] == ["https://acme.test"]


@pytest.mark.asyncio
async def test_blank_required_fields_block_submit(service, store, navigator):
    editor = RecordEditor(service, navigator)
    editor.draft.set_field("name", "   ")

    assert await editor.submit() is False

    assert set(editor.field_errors) == {"name", "agent_name"}
    assert editor.status == EditorStatus.READY
    assert store.call_count("insert") == 0
    assert navigator.visits == []


@pytest.mark.asyncio
async def test_failed_save_keeps_draft_for_retry(service, store, navigator):
    editor = RecordEditor(service, navigator)
    editor.draft.set_field("name", "Acme")
    editor.draft.set_field("agent_name", "Bot1")
    store.fail_on["insert"] = StoreError("insert", "clients", "connection reset")

    assert await editor.submit() is False
    assert editor.status == EditorStatus.ERROR
    assert "connection reset" in editor.error
    assert editor.draft.name == "Acme"
    assert editor.can_submit

    del store.fail_on["insert"]
    assert await editor.submit() is True
    assert len(store.tables["clients"]) == 1


@pytest.mark.asyncio
async def test_saved_client_appears_in_directory_immediately(service, navigator):
    await service.list_clients()
    editor = RecordEditor(service, navigator)
    editor.draft.set_field("name", "Acme")
    editor.draft.set_field("agent_name", "Bot1")

    await editor.submit()

    page = await service.list_clients()
    assert [c.name for c in page.rows] == ["Acme"]


# ── Edit mode ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_edit_mode_loads_record_before_enabling_fields(service, store, navigator):
    row = _seed_client(store)
    editor = RecordEditor(service, navigator, row["id"])
    assert editor.mode == EditorMode.EDIT
    assert editor.fields_disabled
    assert not editor.can_submit

    await editor.open()

    assert editor.status == EditorStatus.READY
    assert not editor.fields_disabled
    assert editor.draft.name == "Acme"
    assert editor.draft.website_urls == ["https://acme.test"]


@pytest.mark.asyncio
async def test_edit_mode_reports_missing_record(service, navigator):
    editor = RecordEditor(service, navigator, "missing")

    await editor.open()

    assert editor.status == EditorStatus.NOT_FOUND
    assert editor.draft is None
    assert await editor.submit() is False


@pytest.mark.asyncio
async def test_edit_mode_load_failure_can_be_retried(service, store, navigator):
    row = _seed_client(store)
    store.fail_on["read_by_key"] = StoreError("read", "clients", "timeout")
    editor = RecordEditor(service, navigator, row["id"])

    await editor.open()
    assert editor.status == EditorStatus.ERROR
    assert not editor.can_submit

    del store.fail_on["read_by_key"]
    await editor.open()
    assert editor.status == EditorStatus.READY


@pytest.mark.asyncio
async def test_link_edits_persist_as_the_net_collection(service, store, navigator):
    row = _seed_client(store)
    editor = RecordEditor(service, navigator, row["id"], clock=_clock)
    await editor.open()

    editor.draft.add_link("google_drive_links", "https://drive/d")
    editor.draft.remove_link("google_drive_links", 1)
    assert await editor.submit() is True

    client = await service.get_client(row["id"])
    assert client.google_drive_links == ["https://drive/a", "https://drive/c", "https://drive/d"]
    assert client.website_urls == ["https://acme.test"]
    assert client.updated_at == FIXED
    assert client.created_at == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert store.call_count("update_by_key") == 1


@pytest.mark.asyncio
async def test_edit_of_concurrently_deleted_record_fails_recoverably(service, store, navigator):
    row = _seed_client(store)
    editor = RecordEditor(service, navigator, row["id"])
    await editor.open()
    store.tables["clients"].pop(row["id"])

    assert await editor.submit() is False

    assert editor.status == EditorStatus.ERROR
    assert editor.draft.name == "Acme"


@pytest.mark.asyncio
async def test_upsert_mode_writes_through_upsert(service, store, navigator):
    row = _seed_client(store)
    editor = RecordEditor(service, navigator, row["id"], use_upsert=True)
    await editor.open()
    editor.draft.set_field("company", "Acme Holdings")

    assert await editor.submit() is True

    assert store.call_count("upsert_by_key") == 1
    assert store.call_count("update_by_key") == 0
    assert store.tables["clients"][row["id"]]["company"] == "Acme Holdings"


@pytest.mark.asyncio
async def test_cancel_discards_draft_without_writing(service, store, navigator):
    row = _seed_client(store)
    editor = RecordEditor(service, navigator, row["id"])
    await editor.open()
    editor.draft.set_field("name", "Changed")

    editor.cancel()

    assert editor.status == EditorStatus.CANCELLED
    assert editor.draft is None
    assert navigator.last == ("directory", None)
    assert store.tables["clients"][row["id"]]["name"] == "Acme"
    assert store.call_count("update_by_key") == 0


def _hold(monkeypatch, service, name: str) -> asyncio.Event:
    """Hold ``service.<name>`` open until the returned event is set."""
    gate = asyncio.Event()
    real = getattr(service, name)

    async def held(*args, **kwargs):
        await gate.wait()
        return await real(*args, **kwargs)

    monkeypatch.setattr(service, name, held)
    return gate


@pytest.mark.asyncio
async def test_load_finishing_after_cancel_is_ignored(service, store, navigator, monkeypatch):
    row = _seed_client(store)
    gate = _hold(monkeypatch, service, "get_client")
    editor = RecordEditor(service, navigator, row["id"])

    loading = asyncio.create_task(editor.open())
    await asyncio.sleep(0)
    editor.cancel()
    gate.set()
    await loading

    assert editor.status == EditorStatus.CANCELLED
    assert editor.draft is None
    assert not editor.can_submit
    assert navigator.visits == [("directory", None)]


@pytest.mark.asyncio
async def test_save_finishing_after_cancel_does_not_navigate_again(service, store, navigator, monkeypatch):
    row = _seed_client(store)
    editor = RecordEditor(service, navigator, row["id"])
    await editor.open()
    editor.draft.set_field("name", "Changed")
    gate = _hold(monkeypatch, service, "update_client")

    saving = asyncio.create_task(editor.submit())
    await asyncio.sleep(0)
    editor.cancel()
    gate.set()

    assert await saving is True
    assert editor.status == EditorStatus.CANCELLED
    assert navigator.visits == [("directory", None)]
    assert store.tables["clients"][row["id"]]["name"] == "Changed"
