from .client import ClientModel
from .client_activity import ClientActivityModel, CommonQueryModel, ErrorLogModel

__all__ = [
    "ClientModel",
    "ClientActivityModel",
    "CommonQueryModel",
    "ErrorLogModel",
]
