"""Client detail view model — the client plus its recent activity, queries and errors."""

import asyncio
import logging
from collections.abc import Awaitable

from client_console.application.interfaces import ConfirmPrompt, Navigator
from client_console.application.services.client_directory_service import ClientDirectoryService
from client_console.application.services.query_builder import DETAIL_PAGE_SIZE
from client_console.application.views.state import SectionState, ViewStatus
from client_console.domain.entities import Client, ClientActivity, CommonQuery, ErrorLog
from client_console.domain.exceptions import EntityNotFoundError, StoreError

logger = logging.getLogger(__name__)


class ClientDetailView:
    """Four independent reads rendered side by side.

    A failing section never blocks the others. When the client itself does
    not exist the view reports ``not_found`` and the three dependent
    sections are shown as loaded and empty, whatever their reads returned.
    """

    def __init__(
        self,
        service: ClientDirectoryService,
        navigator: Navigator,
        confirm: ConfirmPrompt | None = None,
        limit: int = DETAIL_PAGE_SIZE,
    ) -> None:
        self._service = service
        self._navigator = navigator
        self._confirm = confirm
        self._limit = limit
        self.client_id: str | None = None
        self.client: SectionState[Client] = SectionState()
        self.activities: SectionState[list[ClientActivity]] = SectionState()
        self.queries: SectionState[list[CommonQuery]] = SectionState()
        self.errors: SectionState[list[ErrorLog]] = SectionState()
        self.error: str | None = None
        self._sequence = 0
        self._closed = False

    @property
    def status(self) -> ViewStatus:
        return self.client.status

    @property
    def dependent_sections(self) -> tuple[SectionState, ...]:
        return (self.activities, self.queries, self.errors)

    async def open(self, client_id: str) -> None:
        self._closed = False
        self.client_id = client_id
        self._sequence += 1
        sequence = self._sequence
        for section in (self.client, *self.dependent_sections):
            section.start()

        limit = self._limit
        await asyncio.gather(
            self._load_client(sequence, client_id),
            self._load_dependent(sequence, self.activities, self._service.list_activities(client_id, limit)),
            self._load_dependent(sequence, self.queries, self._service.list_common_queries(client_id, limit)),
            self._load_dependent(sequence, self.errors, self._service.list_error_logs(client_id, limit)),
        )

    def close(self) -> None:
        self._closed = True

    async def delete_client(self) -> bool:
        """Delete the displayed client after confirmation and go back to the list."""
        if self.client_id is None:
            return False
        if self._confirm is not None:
            label = self.client.data.name if self.client.data else self.client_id
            if not await self._confirm(f"Delete client '{label}'? This cannot be undone."):
                return False
        try:
            await self._service.delete_client(self.client_id)
        except EntityNotFoundError:
            logger.info("Client %s was already deleted", self.client_id)
        except StoreError as exc:
            logger.warning("Delete of client %s failed: %s", self.client_id, exc)
            self.error = str(exc)
            return False
        self._navigator.to_directory()
        return True

    def edit(self) -> None:
        if self.client_id is not None:
            self._navigator.to_editor(self.client_id)

    def back(self) -> None:
        self._navigator.to_directory()

    # ── Internals ────────────────────────────────────────────────────

    def _is_current(self, sequence: int) -> bool:
        return not self._closed and sequence == self._sequence

    async def _load_client(self, sequence: int, client_id: str) -> None:
        try:
            client = await self._service.find_client(client_id)
        except StoreError as exc:
            if self._is_current(sequence):
                logger.warning("Client read failed for %s: %s", client_id, exc)
                self.client.fail(exc)
            return
        if not self._is_current(sequence):
            return
        if client is None:
            self.client.status = ViewStatus.NOT_FOUND
            self.client.data = None
            for section in self.dependent_sections:
                section.succeed([])
            return
        self.client.succeed(client)

    async def _load_dependent(self, sequence: int, section: SectionState, read: Awaitable[list]) -> None:
        try:
            rows = await read
        except StoreError as exc:
            if self._is_current(sequence) and self.client.status != ViewStatus.NOT_FOUND:
                logger.warning("Detail section read failed: %s", exc)
                section.fail(exc)
            return
        if not self._is_current(sequence):
            return
        section.succeed([] if self.client.status == ViewStatus.NOT_FOUND else rows)
