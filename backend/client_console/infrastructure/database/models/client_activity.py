"""SQLAlchemy ORM models for the read-only records owned by a client.

``client_id`` is a plain indexed column rather than a foreign key: these
rows are written by other processes and their lifetime is not tied to the
client row.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from client_console.infrastructure.database.base import Base


class ClientActivityModel(Base):
    """ORM model — maps to the 'client_activities' table."""

    __tablename__ = "client_activities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    client_id: Mapped[str] = mapped_column(String(36), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (Index("ix_client_activities_client", "client_id", "created_at"),)


class CommonQueryModel(Base):
    """ORM model — maps to the 'common_queries' table."""

    __tablename__ = "common_queries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    client_id: Mapped[str] = mapped_column(String(36), nullable=False)
    query_text: Mapped[str] = mapped_column(Text, nullable=False)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (Index("ix_common_queries_client", "client_id", "frequency"),)


class ErrorLogModel(Base):
    """ORM model — maps to the 'error_logs' table."""

    __tablename__ = "error_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    client_id: Mapped[str] = mapped_column(String(36), nullable=False)
    error_type: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (Index("ix_error_logs_client", "client_id", "created_at"),)
