"""Domain entities for directory queries — filter, ordering and row range."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Collection(str, Enum):
    """Named record collections in the remote store."""

    CLIENTS = "clients"
    CLIENT_ACTIVITIES = "client_activities"
    COMMON_QUERIES = "common_queries"
    ERROR_LOGS = "error_logs"


class SortField(str, Enum):
    """Fields the client directory can be sorted by."""

    NAME = "name"
    AGENT_NAME = "agent_name"
    STATUS = "status"
    UPDATED_AT = "updated_at"

    @property
    def descending(self) -> bool:
        """Most recently updated first; everything else A→Z."""
        return self is SortField.UPDATED_AT


@dataclass(frozen=True)
class RecordFilter:
    """Store-side predicate.

    ``search_text`` matches as a case-insensitive substring of any of
    ``search_fields`` (OR). ``equals`` holds exact ``(field, value)`` pairs
    that must all match (AND).
    """

    search_text: str | None = None
    search_fields: tuple[str, ...] = ()
    equals: tuple[tuple[str, Any], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.search_text and not self.equals

    def matches(self, row: dict[str, Any]) -> bool:
        """Evaluate the predicate against a plain row dict."""
        for field_name, value in self.equals:
            if row.get(field_name) != value:
                return False
        if self.search_text:
            needle = self.search_text.lower()
            return any(
                needle in str(row.get(name) or "").lower()
                for name in self.search_fields
            )
        return True


@dataclass(frozen=True)
class SortOrder:
    """Single-field ordering."""

    field: str
    descending: bool = False


@dataclass(frozen=True)
class QueryDescriptor:
    """Everything the store needs to execute one paginated read.

    The row range is inclusive on both ends.
    """

    collection: str
    filter: RecordFilter
    sort: SortOrder
    range_start: int
    range_end: int

    @property
    def limit(self) -> int:
        return self.range_end - self.range_start + 1


@dataclass(frozen=True)
class DirectoryRequest:
    """User-facing parameters of a directory read."""

    search_text: str = ""
    sort_field: SortField = SortField.UPDATED_AT
    page: int = 1
    page_size: int = 10

    def cache_params(self) -> tuple[Any, ...]:
        """Full parameter tuple used as part of the cache key."""
        return ("list", self.search_text, self.sort_field.value, self.page, self.page_size)


@dataclass
class ResultPage(Generic[T]):
    """One page of rows plus the total available for the same filter."""

    rows: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def has_next_page(self) -> bool:
        return self.page * self.page_size < self.total

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1
