"""Abstract store interface (port) for the remote record collections."""

from abc import ABC, abstractmethod
from typing import Any

from client_console.domain.entities import RecordFilter, SortOrder

Row = dict[str, Any]


class RecordStore(ABC):
    """Port for the remote relational store — implemented in the infrastructure layer.

    Rows are plain dicts keyed by column name. Every call is transactional on
    its own; no multi-statement transactions are needed. Adapter failures
    surface as ``StoreError``.
    """

    @abstractmethod
    async def read(
        self,
        collection: str,
        filter: RecordFilter,
        sort: SortOrder,
        range_start: int,
        range_end: int,
    ) -> list[Row]:
        """Return the rows in the inclusive range ``[range_start, range_end]``."""
        ...

    @abstractmethod
    async def count(self, collection: str, filter: RecordFilter) -> int:
        """Return how many rows match ``filter``, ignoring pagination."""
        ...

    @abstractmethod
    async def read_by_key(self, collection: str, key: str) -> Row | None:
        """Retrieve a single row by its key, or None if it does not exist."""
        ...

    @abstractmethod
    async def insert(self, collection: str, record: Row) -> Row:
        """Insert a new row and return it as stored (key assigned if absent)."""
        ...

    @abstractmethod
    async def update_by_key(self, collection: str, key: str, record: Row) -> Row:
        """Overwrite the row with ``key``. Raises EntityNotFoundError if absent."""
        ...

    @abstractmethod
    async def upsert_by_key(self, collection: str, key: str | None, record: Row) -> Row:
        """Insert when ``key`` is missing or unknown, otherwise update."""
        ...

    @abstractmethod
    async def delete_by_key(self, collection: str, key: str) -> bool:
        """Delete a row. Returns True if deleted, False if not found."""
        ...
