"""Logging bootstrap for the client console.

The directory service logs every cache hit, miss and invalidation and the
view models log every superseded or failed read, which is too chatty for
production. Each of those sources, plus SQLAlchemy and uvicorn, gets its own
level in Settings (``LOG_LEVEL_CACHE``, ``LOG_LEVEL_VIEWS``, ...).

``setup_logging()`` is called once from the FastAPI lifespan in ``main.py``.
"""

import logging
import sys

from client_console.config import get_settings


# Settings field → logger names whose level it controls

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_cache": [
        "ClientDirectoryService",
        "client_console.application.services",
    ],
    "log_level_views": [
        "client_console.application.views",
    ],
}


def setup_logging() -> None:
    """Apply the root and per-category levels from Settings."""
    settings = get_settings()
    root_level = _parse_level(settings.log_level)

    # ── Root logger ────────────────────────────────────────────────
    root = logging.getLogger()
    root.setLevel(root_level)

    # uvicorn installs its own handler; bare scripts and tests do not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s — %(message)s",
            )
        )
        root.addHandler(handler)

    # ── Per-category loggers ───────────────────────────────────────
    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, sql=%s, uvicorn=%s, cache=%s, views=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_uvicorn,
        settings.log_level_cache,
        settings.log_level_views,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
