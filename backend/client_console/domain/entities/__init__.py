from .client import Client, ClientStatus
from .client_activity import ClientActivity, CommonQuery, ErrorLog
from .client_draft import ClientDraft, LinkKind, REQUIRED_CLIENT_FIELDS, required_field_errors
from .query import (
    Collection,
    DirectoryRequest,
    QueryDescriptor,
    RecordFilter,
    ResultPage,
    SortField,
    SortOrder,
)

__all__ = [
    "Client",
    "ClientStatus",
    "ClientActivity",
    "CommonQuery",
    "ErrorLog",
    "ClientDraft",
    "LinkKind",
    "REQUIRED_CLIENT_FIELDS",
    "required_field_errors",
    "Collection",
    "DirectoryRequest",
    "QueryDescriptor",
    "RecordFilter",
    "ResultPage",
    "SortField",
    "SortOrder",
]
