"""Row ↔ entity mapping for store rows.

Older revisions of the ``clients`` table used different column names. Rows
are normalized to the canonical Client shape here so that nothing above this
module has to care which revision wrote a row.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from client_console.application.interfaces import Row
from client_console.domain.entities import (
    Client,
    ClientActivity,
    ClientStatus,
    CommonQuery,
    ErrorLog,
)

logger = logging.getLogger(__name__)

# legacy column name → canonical field, per schema version that dropped it
_LEGACY_CLIENT_ALIASES: dict[int, dict[str, str]] = {
    1: {
        "client_name": "name",
        "ai_agent_name": "agent_name",
        "drive_links": "google_drive_links",
        "urls": "website_urls",
    },
}

_CLIENT_FIELDS = (
    "id",
    "name",
    "agent_name",
    "full_name",
    "email",
    "company",
    "website",
    "description",
    "google_drive_links",
    "website_urls",
    "status",
    "created_at",
    "updated_at",
)


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc)


def _as_links(value: Any) -> list[str]:
    if not value:
        return []
    return [str(item) if item is not None else "" for item in value]


def _as_status(value: Any) -> ClientStatus:
    try:
        return ClientStatus(value)
    except ValueError:
        logger.warning("Unknown client status %r — treating as active", value)
        return ClientStatus.ACTIVE


def normalize_client_row(row: Row) -> Row:
    """Rename legacy columns and drop the ones the canonical shape lacks."""
    normalized = dict(row)
    for aliases in _LEGACY_CLIENT_ALIASES.values():
        for legacy, canonical in aliases.items():
            if legacy in normalized:
                value = normalized.pop(legacy)
                normalized.setdefault(canonical, value)
    return {key: normalized[key] for key in _CLIENT_FIELDS if key in normalized}


def client_from_row(row: Row) -> Client:
    """Map a ``clients`` row → Client entity."""
    data = normalize_client_row(row)
    return Client(
        id=str(data["id"]),
        name=data.get("name") or "",
        agent_name=data.get("agent_name") or "",
        full_name=data.get("full_name"),
        email=data.get("email"),
        company=data.get("company"),
        website=data.get("website"),
        description=data.get("description"),
        google_drive_links=_as_links(data.get("google_drive_links")),
        website_urls=_as_links(data.get("website_urls")),
        status=_as_status(data.get("status") or ClientStatus.ACTIVE.value),
        created_at=_as_datetime(data.get("created_at")),
        updated_at=_as_datetime(data.get("updated_at")),
    )


def client_to_row(client: Client) -> Row:
    """Map Client entity → full ``clients`` row."""
    return {
        "id": client.id,
        "name": client.name,
        "agent_name": client.agent_name,
        "full_name": client.full_name,
        "email": client.email,
        "company": client.company,
        "website": client.website,
        "description": client.description,
        "google_drive_links": list(client.google_drive_links),
        "website_urls": list(client.website_urls),
        "status": client.status.value,
        "created_at": client.created_at,
        "updated_at": client.updated_at,
    }


def activity_from_row(row: Row) -> ClientActivity:
    return ClientActivity(
        id=str(row["id"]),
        client_id=str(row["client_id"]),
        description=row.get("description") or "",
        created_at=_as_datetime(row.get("created_at")),
    )


def query_from_row(row: Row) -> CommonQuery:
    return CommonQuery(
        id=str(row["id"]),
        client_id=str(row["client_id"]),
        query_text=row.get("query_text") or "",
        frequency=int(row.get("frequency") or 0),
    )


def error_log_from_row(row: Row) -> ErrorLog:
    return ErrorLog(
        id=str(row["id"]),
        client_id=str(row["client_id"]),
        error_type=row.get("error_type") or "",
        message=row.get("message") or "",
        created_at=_as_datetime(row.get("created_at")),
    )
