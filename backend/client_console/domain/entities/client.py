"""Domain entity — the managed client and its AI-agent configuration."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class ClientStatus(str, Enum):
    """Lifecycle status shown as a badge in the directory."""

    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Client:
    """Core domain entity for a customer configured with an AI agent.

    ``name`` and ``agent_name`` are required; everything else is optional.
    The two link lists are ordered and may contain duplicates.
    """

    name: str
    agent_name: str
    id: str = field(default_factory=lambda: str(uuid4()))
    full_name: str | None = None
    email: str | None = None
    company: str | None = None
    website: str | None = None
    description: str | None = None
    google_drive_links: list[str] = field(default_factory=list)
    website_urls: list[str] = field(default_factory=list)
    status: ClientStatus = ClientStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_active(self) -> bool:
        return self.status == ClientStatus.ACTIVE
