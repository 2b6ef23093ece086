"""Unit tests for row → entity mapping, including legacy column names."""

from datetime import datetime, timezone

from client_console.application.services.record_mapping import (
    client_from_row,
    client_to_row,
    normalize_client_row,
)
from client_console.domain.entities import Client, ClientStatus


def test_legacy_column_names_map_to_canonical_fields():
    row = {
        "id": "c1",
        "client_name": "Acme",
        "ai_agent_name": "Bot1",
        "drive_links": ["https://drive/a"],
        "urls": ["https://acme.test"],
        "status": "inactive",
        "google_drive_links_added_at": "2024-01-01",
    }

    client = client_from_row(row)

    assert client.name == "Acme"
    assert client.agent_name == "Bot1"
    assert client.google_drive_links == ["https://drive/a"]
    assert client.website_urls == ["https://acme.test"]
    assert client.status is ClientStatus.INACTIVE


def test_canonical_value_wins_over_legacy_alias():
    normalized = normalize_client_row({"id": "c1", "name": "New", "client_name": "Old"})
    assert normalized == {"id": "c1", "name": "New"}


def test_missing_optionals_and_unknown_status_get_defaults():
    client = client_from_row({"id": 7, "name": "Acme", "agent_name": "Bot", "status": "archived"})

    assert client.id == "7"
    assert client.email is None
    assert client.google_drive_links == []
    assert client.status is ClientStatus.ACTIVE


def test_naive_and_string_timestamps_become_utc():
    client = client_from_row(
        {
            "id": "c1",
            "name": "Acme",
            "agent_name": "Bot",
            "created_at": "2025-06-01T10:00:00Z",
            "updated_at": datetime(2025, 6, 2, 10, 0),
        }
    )

    assert client.created_at == datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)
    assert client.updated_at.tzinfo is timezone.utc


def test_entity_to_row_keeps_every_field():
    client = Client(name="Acme", agent_name="Bot", website_urls=["https://acme.test"])

    row = client_to_row(client)

    assert row["id"] == client.id
    assert row["status"] == "active"
    assert client_from_row(row) == client
