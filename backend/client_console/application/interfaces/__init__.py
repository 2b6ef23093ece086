from .navigator import ConfirmPrompt, Navigator
from .record_store import RecordStore, Row

__all__ = [
    "ConfirmPrompt",
    "Navigator",
    "RecordStore",
    "Row",
]
