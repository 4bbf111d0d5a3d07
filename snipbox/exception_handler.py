"""Error types and logging setup shared by the store and the CLI."""

import logging
from pathlib import Path


LOGGER_NAME = "snipbox"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SnippetStoreError(Exception):
    """Base class for errors raised by the snippet store."""


class MalformedStoreError(SnippetStoreError):
    """The snippets file exists but its content cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot parse snippets file {self.path}: {reason}")


class SnippetNotFoundError(SnippetStoreError, KeyError):
    """No snippet with the requested id exists."""

    def __init__(self, snippet_id: int):
        self.snippet_id = snippet_id
        super().__init__(f"Snippet with ID {snippet_id} not found.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ClipboardError(SnippetStoreError):
    """The system clipboard could not be written."""


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the package logger with a single stderr handler."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


__all__ = [
    "ClipboardError",
    "LOGGER_NAME",
    "MalformedStoreError",
    "SnippetNotFoundError",
    "SnippetStoreError",
    "setup_logging",
]
