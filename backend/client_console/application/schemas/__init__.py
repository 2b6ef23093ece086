from .client import (
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

__all__ = [
    "ActivityResponse",
    "ActivitySection",
    "ClientDetailResponse",
    "ClientPageResponse",
    "ClientResponse",
    "ClientStatsResponse",
    "ClientWrite",
    "CommonQueryResponse",
    "CommonQuerySection",
    "ErrorLogResponse",
    "ErrorLogSection",
]
