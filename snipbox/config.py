from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("snipbox")

DEFAULT_FILENAME = ".snippets.json"
DEFAULT_LOG_LEVEL = "WARNING"
FILE_ENV_VAR = "SNIPBOX_FILE"
LOG_LEVEL_ENV_VAR = "SNIPBOX_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class StoreConfig:
    """Where the snippets live and how loudly to log about it."""

    path: Path
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(
        cls,
        path: str | os.PathLike[str] | None = None,
        log_level: str | None = None,
    ) -> "StoreConfig":
        """Resolve settings from explicit values, then env vars, then defaults."""
        raw_path = path or os.getenv(FILE_ENV_VAR)
        if raw_path:
            resolved_path = Path(raw_path).expanduser()
        else:
            resolved_path = default_store_path()

        return cls(
            path=resolved_path,
            log_level=_resolve_log_level(log_level or os.getenv(LOG_LEVEL_ENV_VAR)),
        )


def default_store_path() -> Path:
    return Path.home() / DEFAULT_FILENAME


def _resolve_log_level(raw: str | None) -> str:
    if not raw:
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        logger.warning("Invalid log level %s; using %s", raw, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


__all__ = ["StoreConfig", "default_store_path", "DEFAULT_FILENAME"]
