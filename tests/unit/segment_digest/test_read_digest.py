"""Tests for segment_digest.read_digest module."""

import gzip
from pathlib import Path

import pytest

from segment_digest.read_digest import read_digest
from segment_digest.segment import segment

DATA_DIR = Path(__file__).parent.parent.parent / "data"


class TestSampleDigest:
    def test_sample_digest_segments_into_three_articles(self) -> None:
        articles = segment(read_digest(DATA_DIR / "sample_digest.txt"), stop_marker="■")

        assert [(a.title, a.category) for a in articles] == [
            ("The world this week", "Politics"),
            ("Markets rally on rate hopes", "Business"),
            ("Late winner settles derby", "Sports"),
        ]
        assert articles[0].content == (
            "Parliament passed the budget after a late-night session.\n"
            "Opposition leaders promised to challenge two of its provisions."
        )
        assert articles[1].content == "Stocks rose for a third day as investors priced in a cut."
        assert articles[2].content == "A stoppage-time header decided the match."


class TestReadDigest:
    def test_reads_utf8_text(self, tmp_path) -> None:
        path = tmp_path / "digest.txt"
        path.write_text("Title\nCafé\nApr 25, 2025 02:10 AM\nBody ■", encoding="utf-8")
        assert read_digest(path) == "Title\nCafé\nApr 25, 2025 02:10 AM\nBody ■"

    def test_accepts_string_path(self, tmp_path) -> None:
        path = tmp_path / "digest.txt"
        path.write_text("hello", encoding="utf-8")
        assert read_digest(str(path)) == "hello"

    def test_reads_gzip(self, tmp_path) -> None:
        path = tmp_path / "digest.txt.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write("compressed digest")
        assert read_digest(path) == "compressed digest"

    def test_undecodable_bytes_are_replaced(self, tmp_path) -> None:
        path = tmp_path / "digest.txt"
        path.write_bytes(b"ok \xff ok")
        assert read_digest(path) == "ok � ok"

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_digest(tmp_path / "missing.txt")

    def test_directory_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_digest(tmp_path)

    @pytest.mark.parametrize("content", ["", "  \n\t\n"], ids=["empty", "blank"])
    def test_blank_file_raises_value_error(self, tmp_path, content) -> None:
        path = tmp_path / "digest.txt"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError, match="empty"):
            read_digest(path)
