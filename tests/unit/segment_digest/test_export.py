"""Tests for segment_digest.export module."""

from segment_digest.export import format_article_detail, format_article_line, format_article_text


class TestFormatting:
    def test_article_line(self) -> None:
        assert format_article_line("Title", "Politics", "Apr 25, 2025 02:10 AM") == (
            "Title | Politics | Apr 25, 2025 02:10 AM"
        )

    def test_article_line_with_missing_fields(self) -> None:
        assert format_article_line("Title", None, None) == "Title |  | "

    def test_article_text(self) -> None:
        assert format_article_text("Title", "Body") == "Title\n\nBody"

    def test_article_detail(self) -> None:
        assert format_article_detail("Title", "Sports", "May 1, 2025 03:15 PM", "Body") == (
            "Title\nSports | May 1, 2025 03:15 PM\n\nBody"
        )
