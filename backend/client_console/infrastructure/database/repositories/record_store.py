"""Concrete RecordStore backed by SQLAlchemy async sessions.

Every call opens its own session and commits before returning, so a write
is durable by the time the caller invalidates its cache.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import ColumnElement, and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from client_console.application.interfaces import RecordStore, Row
from client_console.domain.entities import Collection, RecordFilter, SortOrder
from client_console.domain.exceptions import EntityNotFoundError, StoreError
from client_console.infrastructure.database.base import Base
from client_console.infrastructure.database.models import (
    ClientActivityModel,
    ClientModel,
    CommonQueryModel,
    ErrorLogModel,
)

logger = logging.getLogger(__name__)

_MODELS: dict[str, type[Base]] = {
    Collection.CLIENTS.value: ClientModel,
    Collection.CLIENT_ACTIVITIES.value: ClientActivityModel,
    Collection.COMMON_QUERIES.value: CommonQueryModel,
    Collection.ERROR_LOGS.value: ErrorLogModel,
}

_TIMESTAMP_COLUMNS = ("created_at", "updated_at")


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyRecordStore(RecordStore):
    """Implements the RecordStore port over the ORM models in ``models``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ── Mapping helpers ──────────────────────────────────────────────

    def _model(self, collection: str) -> type[Base]:
        name = getattr(collection, "value", collection)
        try:
            return _MODELS[name]
        except KeyError:
            raise StoreError("resolve", name, "unknown collection") from None

    def _column(self, model: type[Base], collection: str, field: str) -> Any:
        if field not in model.__table__.columns:
            raise StoreError("query", collection, f"unknown field '{field}'")
        return getattr(model, field)

    def _to_row(self, obj: Base) -> Row:
        """Map ORM instance → plain row dict."""
        return {column.key: getattr(obj, column.key) for column in obj.__table__.columns}

    def _values(self, model: type[Base], record: Row) -> Row:
        """Drop keys the table has no column for."""
        columns = model.__table__.columns
        return {key: value for key, value in record.items() if key in columns}

    def _where(self, model: type[Base], collection: str, filter: RecordFilter) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []
        for field, value in filter.equals:
            clauses.append(self._column(model, collection, field) == value)
        if filter.search_text:
            pattern = f"%{_escape_like(filter.search_text)}%"
            clauses.append(
                or_(*(
                    self._column(model, collection, field).ilike(pattern, escape="\\")
                    for field in filter.search_fields
                ))
            )
        return clauses

    @asynccontextmanager
    async def _transaction(self, operation: str, collection: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as exc:
            logger.error("Store %s on '%s' failed: %s", operation, collection, exc)
            raise StoreError(operation, collection, str(exc)) from exc

    # ── Reads ────────────────────────────────────────────────────────

    async def read(
        self,
        collection: str,
        filter: RecordFilter,
        sort: SortOrder,
        range_start: int,
        range_end: int,
    ) -> list[Row]:
        model = self._model(collection)
        order_column = self._column(model, collection, sort.field)
        stmt = select(model)
        clauses = self._where(model, collection, filter)
        if clauses:
            stmt = stmt.where(and_(*clauses))
        stmt = (
            stmt.order_by(order_column.desc() if sort.descending else order_column.asc())
            .offset(max(0, range_start))
            .limit(max(0, range_end - range_start + 1))
        )
        async with self._transaction("read", collection) as session:
            result = await session.execute(stmt)
            return [self._to_row(obj) for obj in result.scalars().all()]

    async def count(self, collection: str, filter: RecordFilter) -> int:
        model = self._model(collection)
        stmt = select(func.count()).select_from(model)
        clauses = self._where(model, collection, filter)
        if clauses:
            stmt = stmt.where(and_(*clauses))
        async with self._transaction("count", collection) as session:
            return int((await session.execute(stmt)).scalar_one())

    async def read_by_key(self, collection: str, key: str) -> Row | None:
        model = self._model(collection)
        async with self._transaction("read_by_key", collection) as session:
            obj = await session.get(model, key)
            return self._to_row(obj) if obj is not None else None

    # ── Writes ───────────────────────────────────────────────────────

    async def insert(self, collection: str, record: Row) -> Row:
        model = self._model(collection)
        values = self._values(model, record)
        values["id"] = values.get("id") or str(uuid4())
        now = datetime.now(timezone.utc)
        for column in _TIMESTAMP_COLUMNS:
            if column in model.__table__.columns and values.get(column) is None:
                values[column] = now
        async with self._transaction("insert", collection) as session:
            obj = model(**values)
            session.add(obj)
            await session.flush()
            return self._to_row(obj)

    async def update_by_key(self, collection: str, key: str, record: Row) -> Row:
        model = self._model(collection)
        values = self._values(model, record)
        values.pop("id", None)
        async with self._transaction("update_by_key", collection) as session:
            obj = await session.get(model, key)
            if obj is None:
                raise EntityNotFoundError(collection, key)
            for field, value in values.items():
                setattr(obj, field, value)
            await session.flush()
            return self._to_row(obj)

    async def upsert_by_key(self, collection: str, key: str | None, record: Row) -> Row:
        if key:
            existing = await self.read_by_key(collection, key)
            if existing is not None:
                return await self.update_by_key(collection, key, record)
        return await self.insert(collection, {**record, "id": key or record.get("id")})

    async def delete_by_key(self, collection: str, key: str) -> bool:
        model = self._model(collection)
        async with self._transaction("delete_by_key", collection) as session:
            obj = await session.get(model, key)
            if obj is None:
                return False
            await session.delete(obj)
            await session.flush()
            return True
