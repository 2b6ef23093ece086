"""Record editor view model — create or edit a single client."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from client_console.application.interfaces import Navigator
from client_console.application.services.client_directory_service import ClientDirectoryService
from client_console.domain.entities import Client, ClientDraft
from client_console.domain.exceptions import EntityNotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


class EditorMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class EditorStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    SAVING = "saving"
    ERROR = "error"
    SAVED = "saved"
    CANCELLED = "cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordEditor:
    """Holds a ClientDraft and turns it into one insert or update on submit.

    Edit mode starts with a by-key read; fields stay disabled until it
    resolves. A failed submit keeps the draft so the user can retry
    without retyping anything.
    """

    def __init__(
        self,
        service: ClientDirectoryService,
        navigator: Navigator,
        client_id: str | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
        use_upsert: bool = False,
    ) -> None:
        self._service = service
        self._navigator = navigator
        self._clock = clock
        self._use_upsert = use_upsert
        self.client_id = client_id
        self.mode = EditorMode.EDIT if client_id else EditorMode.CREATE
        self.draft: ClientDraft | None = None
        self.status = EditorStatus.LOADING if client_id else EditorStatus.READY
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self.saved_client: Client | None = None
        self._closed = False
        if self.mode == EditorMode.CREATE:
            self.draft = ClientDraft()

    @property
    def fields_disabled(self) -> bool:
        return self.status in (EditorStatus.LOADING, EditorStatus.SAVING, EditorStatus.NOT_FOUND)

    @property
    def can_submit(self) -> bool:
        return self.draft is not None and self.status in (EditorStatus.READY, EditorStatus.ERROR)

    async def open(self) -> None:
        """Load the record in edit mode. Safe to call again to retry a failed load."""
        if self.mode == EditorMode.CREATE:
            return
        self.status = EditorStatus.LOADING
        self.error = None
        try:
            client = await self._service.get_client(self.client_id)
        except EntityNotFoundError as exc:
            if self._closed:
                return
            logger.info("Editor target missing: %s", exc)
            self.status = EditorStatus.NOT_FOUND
            self.error = str(exc)
            return
        except StoreError as exc:
            if self._closed:
                return
            logger.warning("Could not load client %s for editing: %s", self.client_id, exc)
            self.status = EditorStatus.ERROR
            self.error = str(exc)
            return
        if self._closed:
            logger.debug("Editor closed before client %s loaded", self.client_id)
            return
        self.draft = ClientDraft.from_client(client)
        self.status = EditorStatus.READY

    async def submit(self) -> bool:
        """Validate and save the draft. Returns True when the store accepted it."""
        if not self.can_submit:
            logger.debug("Submit ignored in status %s", self.status.value)
            return False

        self.field_errors = self.draft.validate()
        if self.field_errors:
            self.status = EditorStatus.READY
            return False

        now = self._clock()
        creating = self.mode == EditorMode.CREATE
        payload = self.draft.to_payload(now, stamp_created=creating)
        self.status = EditorStatus.SAVING
        self.error = None
        try:
            if creating:
                saved = await self._service.create_client(payload)
            elif self._use_upsert:
                saved = await self._service.upsert_client(self.client_id, payload)
            else:
                saved = await self._service.update_client(self.client_id, payload)
        except ValidationError as exc:
            if self._closed:
                return False
            self.field_errors = exc.field_errors
            self.status = EditorStatus.READY
            return False
        except (StoreError, EntityNotFoundError) as exc:
            if self._closed:
                return False
            logger.warning("Saving client failed: %s", exc)
            self.error = str(exc)
            self.status = EditorStatus.ERROR
            return False

        self.saved_client = saved
        self.client_id = saved.id
        if self._closed:
            return True
        self.status = EditorStatus.SAVED
        self._navigator.to_directory()
        return True

    def cancel(self) -> None:
        """Discard local edits and leave without touching the store.

        Results of a load or save still in flight are ignored afterwards.
        """
        self._closed = True
        self.draft = None
        self.field_errors = {}
        self.status = EditorStatus.CANCELLED
        self._navigator.to_directory()
