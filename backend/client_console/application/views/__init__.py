from .client_detail_view import ClientDetailView
from .directory_view import DirectoryView
from .record_editor import EditorMode, EditorStatus, RecordEditor
from .state import SectionState, ViewStatus

__all__ = [
    "ClientDetailView",
    "DirectoryView",
    "EditorMode",
    "EditorStatus",
    "RecordEditor",
    "SectionState",
    "ViewStatus",
]
