"""Tests for segment_digest.segment module."""

import logging

import pytest

from segment_digest.config_loader import SegmentConfig
from segment_digest.models import ArticleRecord
from segment_digest.segment import Segmenter, segment, truncate_at_marker

DIGEST = """Title One
Politics
Apr 25, 2025 02:10 AM
Body of article one.

Title Two
Sports
Apr 25, 2025 03:15 PM
Body of article two.
"""


def _normalize(text: str) -> str:
    return " ".join(text.split())


class TestTruncateAtMarker:
    def test_cuts_at_first_marker_and_trims(self) -> None:
        assert truncate_at_marker("Body text ■ footer junk", "■") == "Body text"

    def test_only_first_occurrence_matters(self) -> None:
        assert truncate_at_marker("a ■ b ■ c", "■") == "a"

    def test_marker_absent_leaves_content(self) -> None:
        assert truncate_at_marker("Body text", "■") == "Body text"

    def test_no_marker_configured(self) -> None:
        assert truncate_at_marker("Body ■ text", None) == "Body ■ text"

    def test_empty_marker_is_ignored(self) -> None:
        assert truncate_at_marker("Body ■ text", "") == "Body ■ text"

    def test_marker_at_start_empties_content(self) -> None:
        assert truncate_at_marker("■ footer", "■") == ""


class TestSegment:
    def test_two_article_digest(self) -> None:
        articles = segment(DIGEST)

        assert [a.to_dict() for a in articles] == [
            {
                "title": "Title One",
                "category": "Politics",
                "date": "Apr 25, 2025 02:10 AM",
                "content": "Body of article one.",
            },
            {
                "title": "Title Two",
                "category": "Sports",
                "date": "Apr 25, 2025 03:15 PM",
                "content": "Body of article two.",
            },
        ]

    @pytest.mark.parametrize(
        "text",
        ["", None, "   \n\n\t", "No headers here.\nJust prose.\nAnd more prose."],
        ids=["empty", "none", "whitespace", "prose"],
    )
    def test_no_headers_returns_empty(self, text) -> None:
        assert segment(text) == []

    def test_count_matches_number_of_headers(self) -> None:
        block = "Headline {i}\nWorld\nMay 1, 2025 0{h}:30 PM\nStory {i}.\n\n"
        text = "".join(block.format(i=i, h=i % 10) for i in range(25))
        articles = segment(text)
        assert [a.title for a in articles] == [f"Headline {i}" for i in range(25)]
        assert [a.content for a in articles] == [f"Story {i}." for i in range(25)]

    def test_back_to_back_headers_leave_first_content_empty(self) -> None:
        text = (
            "T1\nC1\nApr 25, 2025 02:10 AM\n"
            "T2\nC2\nApr 25, 2025 03:15 PM\n"
            "Body two"
        )
        articles = segment(text)
        assert [a.content for a in articles] == ["", "Body two"]

    def test_single_header_without_body(self) -> None:
        articles = segment("Title\nCat\nApr 25, 2025 02:10 AM\n\n")
        assert articles == [ArticleRecord(title="Title", category="Cat", date="Apr 25, 2025 02:10 AM", content="")]

    def test_multiline_body_is_kept_intact(self) -> None:
        text = "Title\nCat\nApr 25, 2025 02:10 AM\nLine one.\n\nLine two.\n"
        assert segment(text)[0].content == "Line one.\n\nLine two."

    def test_content_never_includes_next_header(self) -> None:
        articles = segment(DIGEST)
        for article in articles[:-1]:
            assert "Title Two" not in article.content
            assert "Sports" not in article.content

    def test_text_before_first_header_is_dropped(self) -> None:
        articles = segment("Weekly digest\n\n" + DIGEST)
        assert [a.title for a in articles] == ["Title One", "Title Two"]
        assert all("Weekly digest" not in a.content for a in articles)

    def test_text_after_time_on_date_line_goes_to_content(self) -> None:
        articles = segment("Title\nCat\nApr 25, 2025 02:10 AM (updated)\nBody")
        assert articles[0].date == "Apr 25, 2025 02:10 AM"
        assert articles[0].content == "(updated)\nBody"

    def test_crlf_line_endings(self) -> None:
        articles = segment(DIGEST.replace("\n", "\r\n"))
        assert [a.title for a in articles] == ["Title One", "Title Two"]
        assert articles[0].content == "Body of article one."

    def test_start_offsets_increase(self) -> None:
        articles = segment(DIGEST)
        assert [a.start_offset for a in articles] == [0, DIGEST.index("Title Two")]

    def test_round_trip_modulo_whitespace(self) -> None:
        articles = segment(DIGEST)
        rebuilt = " ".join(
            " ".join([a.title, a.category, a.date, a.content]) for a in articles
        )
        assert _normalize(rebuilt) == _normalize(DIGEST)

    def test_stop_marker_truncates_every_article(self) -> None:
        text = (
            "T1\nC1\nApr 25, 2025 02:10 AM\nBody one ■ Source: wire\n"
            "T2\nC2\nApr 25, 2025 03:15 PM\nBody text ■ footer junk\n"
        )
        articles = segment(text, stop_marker="■")
        assert [a.content for a in articles] == ["Body one", "Body text"]

    def test_without_stop_marker_footer_is_kept(self) -> None:
        text = "T1\nC1\nApr 25, 2025 02:10 AM\nBody text ■ footer junk"
        assert segment(text)[0].content == "Body text ■ footer junk"

    def test_body_line_that_looks_like_a_date_splits_the_article(self) -> None:
        text = (
            "Title\nCat\nApr 25, 2025 02:10 AM\n"
            "The meeting ran long\nand ended\nat about 11:45 PM\n"
            "Rest of the story."
        )
        articles = segment(text)
        assert [a.title for a in articles] == ["Title", "The meeting ran long"]
        assert articles[0].content == ""

    def test_body_line_with_non_ascii_clock_does_not_split_the_article(self) -> None:
        text = (
            "Title\nCat\nApr 25, 2025 02:10 AM\n"
            "First line\nsecond line\nat ٠٢:١٠ PM tonight\n"
        )
        articles = segment(text)
        assert len(articles) == 1
        assert articles[0].title == "Title"
        assert articles[0].content.endswith("PM tonight")

    def test_input_text_is_not_modified(self) -> None:
        text = str(DIGEST)
        segment(text, stop_marker="■")
        assert text == DIGEST

    def test_logs_warning_when_nothing_found(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="segment_digest.segment"):
            assert segment("nothing to see") == []
        assert "No article headers found" in caplog.text


class TestSegmenter:
    def test_uses_configured_stop_marker(self) -> None:
        segmenter = Segmenter(SegmentConfig(stop_marker="■"))
        text = "T1\nC1\nApr 25, 2025 02:10 AM\nBody text ■ footer junk"
        assert segmenter.segment(text)[0].content == "Body text"

    def test_default_config_has_no_marker(self) -> None:
        text = "T1\nC1\nApr 25, 2025 02:10 AM\nBody text ■ footer junk"
        assert Segmenter().segment(text)[0].content == "Body text ■ footer junk"

    def test_same_result_as_function(self) -> None:
        assert Segmenter(SegmentConfig()).segment(DIGEST) == segment(DIGEST)
