from .base import Base
from .session import async_session_factory, build_session_factory, create_tables, engine
from .models import ClientActivityModel, ClientModel, CommonQueryModel, ErrorLogModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "build_session_factory",
    "create_tables",
    "ClientModel",
    "ClientActivityModel",
    "CommonQueryModel",
    "ErrorLogModel",
]
