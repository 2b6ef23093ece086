"""Directory view model — paginated, sorted, searchable list of clients."""

import logging
from dataclasses import replace

from client_console.application.interfaces import ConfirmPrompt, Navigator
from client_console.application.services.client_directory_service import ClientDirectoryService
from client_console.application.views.state import ViewStatus
from client_console.domain.entities import Client, DirectoryRequest, ResultPage, SortField
from client_console.domain.exceptions import EntityNotFoundError, StoreError

logger = logging.getLogger(__name__)


class DirectoryView:
    """State machine over idle → loading → loaded | error for the client list.

    Parameter changes re-enter ``loading`` right away but keep the previous
    rows until the new page arrives. Reads are numbered; a read that
    completes after a newer one was issued is dropped, so the view never
    regresses to an older result.
    """

    def __init__(
        self,
        service: ClientDirectoryService,
        navigator: Navigator,
        confirm: ConfirmPrompt | None = None,
    ) -> None:
        self._service = service
        self._navigator = navigator
        self._confirm = confirm
        self.request: DirectoryRequest = service.default_request()
        self.status = ViewStatus.IDLE
        self.rows: list[Client] = []
        self.total = 0
        self.error: str | None = None
        self._page: ResultPage[Client] | None = None
        self._sequence = 0
        self._closed = False

    # ── Lifecycle ────────────────────────────────────────────────────

    async def open(self) -> None:
        """Load the first page with default parameters."""
        self._closed = False
        await self._load()

    def close(self) -> None:
        """Stop applying results; anything still in flight is discarded."""
        self._closed = True

    async def refresh(self) -> None:
        await self._load()

    # ── Parameters ───────────────────────────────────────────────────

    async def set_search(self, text: str | None) -> None:
        self.request = replace(self.request, search_text=(text or "").strip(), page=1)
        await self._load()

    async def set_sort(self, field: SortField | str) -> None:
        self.request = self._service.request(
            self.request.search_text, field, 1, self.request.page_size
        )
        await self._load()

    async def set_page(self, page: int) -> None:
        self.request = replace(self.request, page=max(1, page))
        await self._load()

    async def next_page(self) -> None:
        if self.has_next_page:
            await self.set_page(self.request.page + 1)

    async def previous_page(self) -> None:
        if self.has_previous_page:
            await self.set_page(self.request.page - 1)

    @property
    def has_next_page(self) -> bool:
        return self._page is not None and self._page.has_next_page

    @property
    def has_previous_page(self) -> bool:
        return self.request.page > 1

    # ── Intents ──────────────────────────────────────────────────────

    def add_client(self) -> None:
        self._navigator.to_editor(None)

    def edit_client(self, client_id: str) -> None:
        self._navigator.to_editor(client_id)

    def view_client(self, client_id: str) -> None:
        self._navigator.to_detail(client_id)

    async def delete_client(self, client_id: str) -> bool:
        """Delete after confirmation, then re-run the current read.

        Returns False when the user declines or the store rejects the delete;
        in the latter case the displayed rows are left untouched.
        """
        if self._confirm is not None:
            label = next((c.name for c in self.rows if c.id == client_id), client_id)
            if not await self._confirm(f"Delete client '{label}'? This cannot be undone."):
                return False
        try:
            await self._service.delete_client(client_id)
        except EntityNotFoundError:
            logger.info("Client %s was already deleted — refreshing", client_id)
        except StoreError as exc:
            logger.warning("Delete of client %s failed: %s", client_id, exc)
            self.error = str(exc)
            self.status = ViewStatus.ERROR
            return False
        await self._load()
        return True

    # ── Internals ────────────────────────────────────────────────────

    async def _load(self) -> None:
        if self._closed:
            return
        self._sequence += 1
        sequence = self._sequence
        request = self.request
        self.status = ViewStatus.LOADING
        try:
            page = await self._service.list_clients(request)
        except StoreError as exc:
            if self._is_current(sequence):
                logger.warning("Directory read failed: %s", exc)
                self.status = ViewStatus.ERROR
                self.error = str(exc)
            return
        if not self._is_current(sequence):
            logger.debug("Dropping superseded directory read #%d", sequence)
            return
        self._page = page
        self.rows = page.rows
        self.total = page.total
        self.error = None
        self.status = ViewStatus.LOADED

    def _is_current(self, sequence: int) -> bool:
        return not self._closed and sequence == self._sequence
