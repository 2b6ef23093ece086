"""Ports for the host application's routing and confirmation prompts."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

# Asks the user to confirm an irreversible action; resolves to True to proceed.
ConfirmPrompt = Callable[[str], Awaitable[bool]]


class Navigator(ABC):
    """Screen routing owned by the enclosing application."""

    @abstractmethod
    def to_directory(self) -> None:
        ...

    @abstractmethod
    def to_editor(self, client_id: str | None = None) -> None:
        """Open the editor — create mode when ``client_id`` is None."""
        ...

    @abstractmethod
    def to_detail(self, client_id: str) -> None:
        ...
