"""Data models for the segment_digest stage."""

from dataclasses import dataclass, field
from typing import Any

from common.serialization import serialize_dataclass


@dataclass(frozen=True)
class HeaderMatch:
    """A title/category/date triple found in the digest text."""
    start: int
    end: int
    title: str
    category: str
    date: str


@dataclass(frozen=True)
class ArticleRecord:
    """Article segmented out of a digest: header fields plus body text."""
    title: str
    category: str
    date: str
    content: str = ""
    start_offset: int = field(default=0, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Public fields only; start_offset is scan bookkeeping."""
        return serialize_dataclass(self, exclude=("start_offset",))
