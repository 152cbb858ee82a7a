"""CLI for segmenting digest files and browsing stored articles."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import yaml
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from common.cli_helpers import save_jsonl_local, setup_logging
from digest_store import repository
from digest_store.connection import Database
from segment_digest.config_loader import DigestConfig, SegmentConfig, load_config
from segment_digest.export import format_article_detail, format_article_line, format_article_text
from segment_digest.read_digest import read_digest
from segment_digest.segment import Segmenter

load_dotenv()

logger = logging.getLogger(__name__)

NO_ARTICLES_MESSAGE = (
    "No articles found in the file. Make sure the file contains articles "
    "with the correct header format:\n"
    "  <Title>     (e.g., \"The world this week\")\n"
    "  <Category>  (e.g., \"Politics\")\n"
    "  <Date>      (e.g., \"Apr 25, 2025 02:10 AM\")"
)


def cmd_segment(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    """Segment a digest file; optionally write JSONL and/or store it."""
    text = read_digest(args.path)

    stop_marker = config.segment.stop_marker if args.stop_marker is None else args.stop_marker
    articles = Segmenter(SegmentConfig(stop_marker=stop_marker)).segment(text)
    if not articles:
        print(NO_ARTICLES_MESSAGE)
        return 1

    print(f"Articles found: {len(articles)}")
    for article in articles:
        print(format_article_line(article.title, article.category, article.date))

    if args.load_local:
        filepath = save_jsonl_local(
            [article.to_dict() for article in articles],
            "segmented_articles",
            datetime.now(timezone.utc),
            output_dir=args.output_dir,
        )
        logger.info("Saved %d articles to %s", len(articles), filepath)

    if args.save:
        database.create_tables()
        with database.session() as session:
            file_id = repository.save_file_with_articles(session, Path(args.path).name, text, articles)
        print(f"Saved file {file_id} with {len(articles)} articles")

    return 0


def cmd_files(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        files = repository.get_all_files(session)
        if not files:
            print("No files stored")
        for digest_file in files:
            print(f"{digest_file.id}\t{digest_file.created_at:%Y-%m-%d %H:%M}\t{digest_file.name}")
    return 0


def cmd_articles(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        if args.search:
            articles = repository.search_articles(session, args.search)
        elif args.file_id is not None:
            articles = repository.get_articles_by_file_id(session, args.file_id)
        else:
            articles = repository.get_all_articles(session)

        print(f"Articles found: {len(articles)}")
        for article in articles:
            print(f"{article.id}\t{format_article_line(article.title, article.category, article.date)}")
    return 0


def cmd_show(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        article = repository.get_article_by_id(session, args.article_id)
        if article is None:
            print(f"Article {args.article_id} not found", file=sys.stderr)
            return 1
        print(format_article_detail(article.title, article.category, article.date, article.content))
        if article.bookmark is not None:
            print(f"\n[bookmarked] {article.bookmark.notes}")
    return 0


def cmd_export(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        article = repository.get_article_by_id(session, args.article_id)
        if article is None:
            print(f"Article {args.article_id} not found", file=sys.stderr)
            return 1
        print(format_article_text(article.title, article.content))
    return 0


def cmd_bookmark(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        try:
            repository.bookmark_article(session, args.article_id, args.notes)
        except LookupError as exc:
            print(str(exc), file=sys.stderr)
            return 1
    print(f"Bookmarked article {args.article_id}")
    return 0


def cmd_unbookmark(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        removed = repository.remove_bookmark(session, args.article_id)
    print(f"Removed bookmark on article {args.article_id}" if removed else f"Article {args.article_id} was not bookmarked")
    return 0


def cmd_bookmarks(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        bookmarked = repository.get_bookmarked_articles(session)
        print(f"Bookmarks: {len(bookmarked)}")
        for article, bookmark in bookmarked:
            line = format_article_line(article.title, article.category, article.date)
            notes = f"\t{bookmark.notes}" if bookmark.notes else ""
            print(f"{article.id}\t{line}{notes}")
    return 0


def cmd_delete_file(args: argparse.Namespace, config: DigestConfig, database: Database) -> int:
    database.create_tables()
    with database.session() as session:
        deleted = repository.delete_file(session, args.file_id)
    if not deleted:
        print(f"File {args.file_id} not found", file=sys.stderr)
        return 1
    print(f"Deleted file {args.file_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Segment digest files into articles")
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (default/test) or path to YAML file (default: $DIGEST_CONFIG or default)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    segment_parser = subparsers.add_parser("segment", help="Segment a digest file")
    segment_parser.add_argument("path", help="Path to the digest text file")
    segment_parser.add_argument(
        "--stop-marker",
        default=None,
        help="Cut article bodies at this glyph (overrides config; empty string disables)",
    )
    segment_parser.add_argument("--save", action="store_true", help="Store the file and its articles")
    segment_parser.add_argument("--load-local", action="store_true", help="Write articles to a JSONL file")
    segment_parser.add_argument("--output-dir", default="output")
    segment_parser.set_defaults(func=cmd_segment)

    files_parser = subparsers.add_parser("files", help="List stored files")
    files_parser.set_defaults(func=cmd_files)

    articles_parser = subparsers.add_parser("articles", help="List or search stored articles")
    group = articles_parser.add_mutually_exclusive_group()
    group.add_argument("--file-id", type=int, default=None)
    group.add_argument("--search", default=None, help="Case-insensitive text in title or content")
    articles_parser.set_defaults(func=cmd_articles)

    show_parser = subparsers.add_parser("show", help="Show one article")
    show_parser.add_argument("article_id", type=int)
    show_parser.set_defaults(func=cmd_show)

    export_parser = subparsers.add_parser("export", help="Print an article's title and content")
    export_parser.add_argument("article_id", type=int)
    export_parser.set_defaults(func=cmd_export)

    bookmark_parser = subparsers.add_parser("bookmark", help="Bookmark an article (replaces notes)")
    bookmark_parser.add_argument("article_id", type=int)
    bookmark_parser.add_argument("--notes", default="")
    bookmark_parser.set_defaults(func=cmd_bookmark)

    unbookmark_parser = subparsers.add_parser("unbookmark", help="Remove a bookmark")
    unbookmark_parser.add_argument("article_id", type=int)
    unbookmark_parser.set_defaults(func=cmd_unbookmark)

    bookmarks_parser = subparsers.add_parser("bookmarks", help="List bookmarked articles")
    bookmarks_parser.set_defaults(func=cmd_bookmarks)

    delete_parser = subparsers.add_parser("delete-file", help="Delete a file and its articles")
    delete_parser.add_argument("file_id", type=int)
    delete_parser.set_defaults(func=cmd_delete_file)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Failed to load config: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    database = Database(config.database.url, echo=config.database.echo)
    try:
        return args.func(args, config, database)
    except (OSError, ValueError) as exc:
        logger.error("Failed to read input: %s", exc)
        print(f"Error reading file: {exc}", file=sys.stderr)
        return 1
    except SQLAlchemyError as exc:
        logger.exception("Database error")
        print(f"Database error: {exc}", file=sys.stderr)
        return 1
    finally:
        database.close()


if __name__ == "__main__":
    sys.exit(main())
