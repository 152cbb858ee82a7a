"""Core segmentation logic: split a digest into article records."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from segment_digest.config_loader import SegmentConfig
from segment_digest.header_matcher import iter_header_matches
from segment_digest.models import ArticleRecord

logger = logging.getLogger(__name__)


def truncate_at_marker(content: str, stop_marker: Optional[str]) -> str:
    """Cut content before the first stop marker and re-trim."""
    if not stop_marker:
        return content
    index = content.find(stop_marker)
    if index == -1:
        return content
    return content[:index].strip()


def _content_between(text: str, start: int, end: int | None, stop_marker: Optional[str]) -> str:
    return truncate_at_marker(text[start:end].strip(), stop_marker)


def segment(text: Optional[str], stop_marker: Optional[str] = None) -> list[ArticleRecord]:
    """Segment digest text into articles in order of appearance.

    Text between two headers belongs to the earlier article; text after the
    last header belongs to the last one. Text before the first header is
    dropped. Returns an empty list when no header is found.
    """
    if not text:
        return []

    articles: list[ArticleRecord] = []
    last_end: int | None = None

    for match in iter_header_matches(text):
        if last_end is not None:
            articles[-1] = replace(
                articles[-1],
                content=_content_between(text, last_end, match.start, stop_marker),
            )

        articles.append(
            ArticleRecord(
                title=match.title,
                category=match.category,
                date=match.date,
                content="",
                start_offset=match.start,
            )
        )
        last_end = match.end

    if not articles:
        logger.warning("No article headers found in %d characters of text", len(text))
        return []

    articles[-1] = replace(
        articles[-1],
        content=_content_between(text, last_end, None, stop_marker),
    )

    logger.debug("Segmented %d articles", len(articles))
    return articles


class Segmenter:
    """Segmenter bound to a SegmentConfig."""

    def __init__(self, config: SegmentConfig | None = None):
        self.config = config or SegmentConfig()

    def segment(self, text: Optional[str]) -> list[ArticleRecord]:
        return segment(text, stop_marker=self.config.stop_marker)
