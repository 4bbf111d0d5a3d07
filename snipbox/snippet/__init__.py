"""Snippet data model and file-backed storage."""

from .model import Snippet, split_tags
from .snippet_storage import SnippetStore

__all__ = ["Snippet", "SnippetStore", "split_tags"]
