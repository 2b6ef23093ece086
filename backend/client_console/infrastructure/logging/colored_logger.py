"""Colored sync logger — ANSI-colored console logging for store round-trips.

Provides a SyncLogger with color-coded output per sync stage, making it
easy to see in the terminal which reads were served from the cache, which
went to the store and which mutations invalidated what.

Color scheme:
    🟢 Green   — Cache hits
    🟡 Yellow  — Cache misses / coalesced loads
    🔵 Blue    — Store reads
    🟣 Magenta — Store writes
    🟠 Cyan    — Invalidation
    🔴 Red     — Failed steps
    ⚪ Gray    — Timing / Stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Sync Stage Definitions ───────────────────────────────────────────

class SyncStage:
    """Predefined sync stages with colors and icons."""

    CACHE_HIT = ("CACHE_HIT", _Colors.GREEN, "⚡")
    CACHE_MISS = ("CACHE_MISS", _Colors.YELLOW, "🔎")
    STORE_READ = ("STORE_READ", _Colors.BLUE, "📖")
    STORE_WRITE = ("STORE_WRITE", _Colors.MAGENTA, "✏️")
    INVALIDATE = ("INVALIDATE", _Colors.CYAN, "♻️")


def _format_details(kwargs: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in kwargs.items())


# ── SyncLogger ───────────────────────────────────────────────────────

class SyncLogger:
    """Color-coded logger for cache and store round-trips.

    Usage:
        log = SyncLogger("ClientDirectoryService")
        with log.timed_step(SyncStage.STORE_READ, "Listing clients", page=1):
            rows = await store.read(...)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a step with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.debug(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a step."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a failed step in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def stats(self, **kwargs: Any) -> None:
        """Log statistics such as cache counters."""
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.debug(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(SyncStage.STORE_WRITE, "Deleting client", id=client_id):
                await store.delete_by_key("clients", client_id)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.3f}s", **kwargs)
