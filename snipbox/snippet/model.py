from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def split_tags(tags_csv: str | None) -> List[str]:
    """Split a comma-separated tag string as typed by the user.

    No trimming or de-duplication: ``"a, b,a"`` becomes ``["a", " b", "a"]``.
    """
    if not tags_csv:
        return []
    return tags_csv.split(",")


class Snippet(BaseModel):
    """A stored code snippet as persisted in the snippets file."""

    id: int = Field(..., ge=1)
    title: str
    code: str
    tags: List[str] = Field(default_factory=list)
    created: datetime = Field(default_factory=_utc_now)

    model_config = ConfigDict(extra="ignore")

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def matches(self, query: str) -> bool:
        needle = query.lower()
        return needle in self.title.lower() or needle in self.code.lower()


__all__ = ["Snippet", "split_tags"]
