"""Domain entities for the read-only records hanging off a client."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class ClientActivity:
    """A single entry in a client's activity log."""

    id: str
    client_id: str
    description: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class CommonQuery:
    """A question the client's agent is frequently asked."""

    id: str
    client_id: str
    query_text: str
    frequency: int = 0


@dataclass
class ErrorLog:
    """An error reported by the client's agent."""

    id: str
    client_id: str
    error_type: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
