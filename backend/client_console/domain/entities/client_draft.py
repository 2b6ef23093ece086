"""Editable draft of a client — the single source of form state in the editor."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Literal

from .client import Client, ClientStatus

LinkKind = Literal["google_drive_links", "website_urls"]

REQUIRED_CLIENT_FIELDS: dict[str, str] = {
    "name": "Client name is required",
    "agent_name": "AI agent name is required",
}

_LINK_KINDS: tuple[str, ...] = ("google_drive_links", "website_urls")


def required_field_errors(values: Mapping[str, Any]) -> dict[str, str]:
    """Return ``{field: message}`` for every required field that is blank."""
    errors: dict[str, str] = {}
    for name, message in REQUIRED_CLIENT_FIELDS.items():
        value = values.get(name)
        if value is None or not str(value).strip():
            errors[name] = message
    return errors


@dataclass
class ClientDraft:
    """Local, unsaved copy of every editable client field.

    Link lists are edited in place by index; nothing here talks to the store.
    """

    name: str = ""
    agent_name: str = ""
    full_name: str = ""
    email: str = ""
    company: str = ""
    website: str = ""
    description: str = ""
    google_drive_links: list[str] = field(default_factory=list)
    website_urls: list[str] = field(default_factory=list)
    status: ClientStatus = ClientStatus.ACTIVE

    @classmethod
    def from_client(cls, client: Client) -> "ClientDraft":
        return cls(
            name=client.name,
            agent_name=client.agent_name,
            full_name=client.full_name or "",
            email=client.email or "",
            company=client.company or "",
            website=client.website or "",
            description=client.description or "",
            google_drive_links=list(client.google_drive_links),
            website_urls=list(client.website_urls),
            status=client.status,
        )

    # ── Scalar fields ────────────────────────────────────────────────

    def set_field(self, name: str, value: Any) -> None:
        if name in _LINK_KINDS or name not in {f.name for f in fields(self)}:
            raise AttributeError(f"'{name}' is not an editable scalar field")
        if name == "status":
            value = ClientStatus(value)
        setattr(self, name, value)

    # ── Link collections ─────────────────────────────────────────────

    def _links(self, kind: LinkKind) -> list[str]:
        if kind not in _LINK_KINDS:
            raise ValueError(f"Unknown link collection '{kind}'")
        return getattr(self, kind)

    def add_link(self, kind: LinkKind, value: str = "") -> int:
        """Append an entry (empty by default) and return its index."""
        links = self._links(kind)
        links.append(value)
        return len(links) - 1

    def edit_link(self, kind: LinkKind, index: int, value: str) -> None:
        links = self._links(kind)
        if not 0 <= index < len(links):
            raise IndexError(f"{kind} has no entry at index {index}")
        links[index] = value

    def remove_link(self, kind: LinkKind, index: int) -> str:
        links = self._links(kind)
        if not 0 <= index < len(links):
            raise IndexError(f"{kind} has no entry at index {index}")
        return links.pop(index)

    # ── Validation & payload ─────────────────────────────────────────

    def validate(self) -> dict[str, str]:
        return required_field_errors({"name": self.name, "agent_name": self.agent_name})

    def to_payload(self, now: datetime, *, stamp_created: bool = False) -> dict[str, Any]:
        """Full-record payload — every field, changed or not.

        Optional text fields left blank are stored as NULL.
        """
        payload: dict[str, Any] = {
            "name": self.name.strip(),
            "agent_name": self.agent_name.strip(),
            "full_name": self.full_name or None,
            "email": self.email or None,
            "company": self.company or None,
            "website": self.website or None,
            "description": self.description or None,
            "google_drive_links": list(self.google_drive_links),
            "website_urls": list(self.website_urls),
            "status": self.status.value,
            "updated_at": now,
        }
        if stamp_created:
            payload["created_at"] = now
        return payload
