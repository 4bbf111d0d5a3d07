"""Shared utility modules for the snipbox project."""

from .clipboard import Clipboard, SystemClipboard
from .file_io import atomic_write_text, exclusive_lock

__all__ = [
    "Clipboard",
    "SystemClipboard",
    "atomic_write_text",
    "exclusive_lock",
]
