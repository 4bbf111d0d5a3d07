"""Core package for the snipbox snippet manager."""

from .config import StoreConfig
from .exception_handler import (
    ClipboardError,
    MalformedStoreError,
    SnippetNotFoundError,
    SnippetStoreError,
)
from .snippet import Snippet, SnippetStore
from .utils import SystemClipboard

__all__ = [
    "ClipboardError",
    "MalformedStoreError",
    "Snippet",
    "SnippetNotFoundError",
    "SnippetStore",
    "SnippetStoreError",
    "StoreConfig",
    "SystemClipboard",
]
