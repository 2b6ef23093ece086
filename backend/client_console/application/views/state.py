"""Shared read-state types for the view models."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"
    NOT_FOUND = "not_found"


@dataclass
class SectionState(Generic[T]):
    """Loading/loaded/error state of one independently fetched section."""

    status: ViewStatus = ViewStatus.IDLE
    data: T | None = None
    error: str | None = None

    def start(self) -> None:
        self.status = ViewStatus.LOADING
        self.error = None

    def succeed(self, data: T) -> None:
        self.status = ViewStatus.LOADED
        self.data = data
        self.error = None

    def fail(self, error: Exception | str) -> None:
        # data is kept so the last good result stays visible
        self.status = ViewStatus.ERROR
        self.error = str(error)

    @property
    def is_loading(self) -> bool:
        return self.status == ViewStatus.LOADING
