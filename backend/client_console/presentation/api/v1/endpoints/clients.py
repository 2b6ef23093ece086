"""Client directory endpoints — list, detail, create, update, delete."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status

from client_console.application.interfaces import Navigator
from client_console.application.schemas import (
    ActivityResponse,
    ActivitySection,
    ClientDetailResponse,
    ClientPageResponse,
    ClientResponse,
    ClientStatsResponse,
    ClientWrite,
    CommonQueryResponse,
    CommonQuerySection,
    ErrorLogResponse,
    ErrorLogSection,
)
from client_console.application.services import ClientDirectoryService
from client_console.application.views import ClientDetailView, ViewStatus
from client_console.config import get_settings
from client_console.domain.entities import SortField
from client_console.domain.exceptions import EntityNotFoundError, StoreError, ValidationError
from client_console.infrastructure.dependencies import get_client_directory_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


# ── Helpers ──────────────────────────────────────────────────────────


class _NoNavigation(Navigator):
    """HTTP callers do their own routing."""

    def to_directory(self) -> None:
        pass

    def to_editor(self, client_id: str | None = None) -> None:
        pass

    def to_detail(self, client_id: str) -> None:
        pass


def _store_unavailable(exc: StoreError) -> HTTPException:
    logger.warning("Store failure surfaced to API caller: %s", exc)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


def _invalid(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": str(exc), "field_errors": exc.field_errors},
    )


def _validated_payload(data: ClientWrite, *, creating: bool) -> dict:
    draft = data.to_draft()
    errors = draft.validate()
    if errors:
        raise _invalid(ValidationError(errors))
    return draft.to_payload(datetime.now(timezone.utc), stamp_created=creating)


# ── Endpoints ────────────────────────────────────────────────────────


@router.get("", response_model=ClientPageResponse)
async def list_clients(
    search: str | None = Query(None, description="Substring of name, email or company"),
    sort: SortField = Query(SortField.UPDATED_AT, description="Sort field"),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1, le=100),
    service: ClientDirectoryService = Depends(get_client_directory_service),
) -> ClientPageResponse:
    """Retrieve one page of the client directory."""
    request = service.request(search, sort, page, page_size)
    try:
        result = await service.list_clients(request)
    except StoreError as e:
        raise _store_unavailable(e)
    return ClientPageResponse(
        items=[ClientResponse.model_validate(c, from_attributes=True) for c in result.rows],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        has_next_page=result.has_next_page,
        has_previous_page=result.has_previous_page,
    )


@router.get("/stats", response_model=ClientStatsResponse)
async def client_stats(
    service: ClientDirectoryService = Depends(get_client_directory_service),
) -> ClientStatsResponse:
    """Client counts for the dashboard."""
    try:
        stats = await service.get_stats()
    except StoreError as e:
        raise _store_unavailable(e)
    return ClientStatsResponse(**stats)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    service: ClientDirectoryService = Depends(get_client_directory_service),
) -> ClientResponse:
    """Retrieve a single client by ID."""
    try:
        client = await service.get_client(client_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError as e:
        raise _store_unavailable(e)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.get("/{client_id}/detail", response_model=ClientDetailResponse)
async def get_client_detail(
    client_id: str,
    service: ClientDirectoryService = Depends(get_client_directory_service),
) -> ClientDetailResponse:
    """Client plus recent activity, common queries and error logs.

    Each section reports its own status so one failing read does not hide
    the others.
    """
    view = ClientDetailView(service, _NoNavigation(), limit=get_settings().detail_page_size)
    await view.open(client_id)
    if view.status == ViewStatus.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client with id '{client_id}' not found",
        )
    client = view.client.data
    return ClientDetailResponse(
        status=view.status,
        error=view.client.error,
        client=ClientResponse.model_validate(client, from_attributes=True) if client else None,
        activities=ActivitySection(
            status=view.activities.status,
            error=view.activities.error,
            items=[ActivityResponse.model_validate(a, from_attributes=True) for a in view.activities.data or []],
        ),
        common_queries=CommonQuerySection(
            status=view.queries.status,
            error=view.queries.error,
            items=[CommonQueryResponse.model_validate(q, from_attributes=True) for q in view.queries.data or []],
        ),
        error_logs=ErrorLogSection(
            status=view.errors.status,
            error=view.errors.error,
            items=[ErrorLogResponse.model_validate(e, from_attributes=True) for e in view.errors.data or []],
        ),
    )


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientWrite,
    service: ClientDirectoryService = Depends(get_client_directory_service),
) -> ClientResponse:
    """Create a new client."""
    payload = _validated_payload(data, creating=True)
    try:
        client = await service.create_client(payload)
    except ValidationError as e:
        raise _invalid(e)
    except StoreError as e:
        raise _store_unavailable(e)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientWrite,
    service: ClientDirectoryService = Depends(get_client_directory_service),
) -> ClientResponse:
    """Replace every editable field of an existing client."""
    payload = _validated_payload(data, creating=False)
    try:
        client = await service.update_client(client_id, payload)
    except ValidationError as e:
        raise _invalid(e)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError as e:
        raise _store_unavailable(e)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: str,
    service: ClientDirectoryService = Depends(get_client_directory_service),
) -> None:
    """Permanently delete a client by ID."""
    try:
        await service.delete_client(client_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError as e:
        raise _store_unavailable(e)
