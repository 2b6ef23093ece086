"""Query builder — turns directory input into store query descriptors."""

from client_console.domain.entities import (
    Collection,
    DirectoryRequest,
    QueryDescriptor,
    RecordFilter,
    SortField,
    SortOrder,
)

CLIENT_SEARCH_FIELDS: tuple[str, ...] = ("name", "email", "company")

DETAIL_PAGE_SIZE = 5

# Default ordering of each dependent collection on the detail screen
_DEPENDENT_ORDERING: dict[str, SortOrder] = {
    Collection.CLIENT_ACTIVITIES.value: SortOrder("created_at", descending=True),
    Collection.COMMON_QUERIES.value: SortOrder("frequency", descending=True),
    Collection.ERROR_LOGS.value: SortOrder("created_at", descending=True),
}


def normalize_request(
    search_text: str | None = None,
    sort_field: SortField | str | None = None,
    page: int | None = None,
    page_size: int | None = None,
    *,
    default_page_size: int = 10,
) -> DirectoryRequest:
    """Coerce loosely-typed input into a DirectoryRequest.

    Missing search text becomes ``""``, unknown sort fields fall back to
    ``updated_at`` and non-positive page numbers or sizes are clamped to 1.
    """
    try:
        field = SortField(sort_field) if sort_field else SortField.UPDATED_AT
    except ValueError:
        field = SortField.UPDATED_AT
    return DirectoryRequest(
        search_text=(search_text or "").strip(),
        sort_field=field,
        page=max(1, page or 1),
        page_size=max(1, page_size or default_page_size),
    )


def row_range(page: int, page_size: int) -> tuple[int, int]:
    """Inclusive ``(start, end)`` row offsets of a 1-based page."""
    start = (page - 1) * page_size
    return start, start + page_size - 1


def build_client_query(request: DirectoryRequest) -> QueryDescriptor:
    """Build the descriptor for one page of the client directory."""
    request = normalize_request(
        request.search_text, request.sort_field, request.page, request.page_size
    )
    search = request.search_text
    record_filter = (
        RecordFilter(search_text=search, search_fields=CLIENT_SEARCH_FIELDS)
        if search
        else RecordFilter()
    )
    start, end = row_range(request.page, request.page_size)
    return QueryDescriptor(
        collection=Collection.CLIENTS.value,
        filter=record_filter,
        sort=SortOrder(request.sort_field.value, descending=request.sort_field.descending),
        range_start=start,
        range_end=end,
    )


def build_dependent_query(
    collection: Collection | str,
    client_id: str,
    limit: int = DETAIL_PAGE_SIZE,
) -> QueryDescriptor:
    """Build the descriptor for a client's activities, queries or errors."""
    name = Collection(collection).value
    return QueryDescriptor(
        collection=name,
        filter=RecordFilter(equals=(("client_id", client_id),)),
        sort=_DEPENDENT_ORDERING[name],
        range_start=0,
        range_end=max(1, limit) - 1,
    )
