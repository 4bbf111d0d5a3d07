from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence

from pydantic import TypeAdapter, ValidationError

from ..exception_handler import MalformedStoreError, SnippetNotFoundError
from ..utils.clipboard import Clipboard
from ..utils.file_io import atomic_write_text, exclusive_lock
from .model import Snippet, split_tags

logger = logging.getLogger("snipbox")

_SNIPPET_LIST = TypeAdapter(List[Snippet])


class SnippetStore:
    """Snippets kept as a single JSON array in one file.

    Every call reads the whole file; mutating calls rewrite it in full while
    holding an advisory lock, so the file never reflects a half-applied
    operation.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> List[Snippet]:
        """Read all snippets. A missing or unreadable file is an empty store."""
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            logger.debug("Snippets file %s not readable (%s); starting empty", self.path, exc)
            return []
        return self._parse(raw)

    def _load_for_update(self) -> List[Snippet]:
        # Only a missing file is empty here; other read errors propagate so
        # save never replaces content that could not be read.
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        return self._parse(raw)

    def _parse(self, raw: bytes) -> List[Snippet]:
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedStoreError(self.path, str(exc)) from exc

        if not isinstance(data, list):
            raise MalformedStoreError(self.path, f"expected a JSON array, got {type(data).__name__}")

        try:
            snippets = _SNIPPET_LIST.validate_python(data)
        except ValidationError as exc:
            raise MalformedStoreError(self.path, str(exc)) from exc

        logger.debug("Loaded %d snippets from %s", len(snippets), self.path)
        return snippets

    def save(self, snippets: Sequence[Snippet]) -> None:
        """Overwrite the file with ``snippets``."""
        payload = [snippet.model_dump(mode="json") for snippet in snippets]
        atomic_write_text(self.path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
        logger.debug("Saved %d snippets to %s", len(payload), self.path)

    def add(self, title: str, code: str, tags_csv: str | None = None) -> Snippet:
        """Append a new snippet and return it with its assigned id."""
        with exclusive_lock(self.path):
            snippets = self._load_for_update()
            snippet = Snippet(
                id=self.next_id(snippets),
                title=title,
                code=code,
                tags=split_tags(tags_csv),
            )
            snippets.append(snippet)
            self.save(snippets)

        logger.info("Added snippet %d (%s)", snippet.id, snippet.title)
        return snippet

    def list(self, tag: str | None = None) -> List[Snippet]:
        """All snippets in storage order, optionally only those tagged ``tag``."""
        snippets = self.load()
        if not tag:
            return snippets
        return [snippet for snippet in snippets if snippet.has_tag(tag)]

    def search(self, query: str) -> List[Snippet]:
        """Case-insensitive substring match against title or code."""
        return [snippet for snippet in self.load() if snippet.matches(query)]

    def get(self, snippet_id: int) -> Snippet | None:
        for snippet in self.load():
            if snippet.id == snippet_id:
                return snippet
        return None

    def delete(self, snippet_id: int) -> Snippet:
        """Remove the first snippet with ``snippet_id`` and return it.

        Raises SnippetNotFoundError without touching the file if no such
        snippet exists.
        """
        if not self.path.exists():
            raise SnippetNotFoundError(snippet_id)

        with exclusive_lock(self.path):
            snippets = self._load_for_update()
            index = _find_index(snippets, snippet_id)
            if index is None:
                raise SnippetNotFoundError(snippet_id)
            removed = snippets.pop(index)
            self.save(snippets)

        logger.info("Deleted snippet %d (%s)", removed.id, removed.title)
        return removed

    def copy(self, snippet_id: int, clipboard: Clipboard) -> Snippet:
        """Hand the code of ``snippet_id`` to ``clipboard``."""
        snippet = self.get(snippet_id)
        if snippet is None:
            raise SnippetNotFoundError(snippet_id)
        clipboard.write(snippet.code)
        logger.debug("Copied snippet %d to clipboard", snippet.id)
        return snippet

    @staticmethod
    def next_id(snippets: Sequence[Snippet]) -> int:
        # max + 1 rather than len + 1 so ids freed by deletes are never reissued
        return max((snippet.id for snippet in snippets), default=0) + 1


def _find_index(snippets: Sequence[Snippet], snippet_id: int) -> int | None:
    for index, snippet in enumerate(snippets):
        if snippet.id == snippet_id:
            return index
    return None


__all__ = ["SnippetStore"]
