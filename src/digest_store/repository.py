"""Queries and writes for digest files, articles and bookmarks."""

import logging
from collections.abc import Iterable

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from digest_store.models import Article, Bookmark, DigestFile, utcnow
from segment_digest.models import ArticleRecord

logger = logging.getLogger(__name__)


def _select_articles():
    return select(Article).options(joinedload(Article.file))


def save_file_with_articles(
    session: Session,
    name: str,
    content: str,
    articles: Iterable[ArticleRecord],
) -> int:
    """
    Save a digest file and its articles as one unit.

    Either the file and every article are committed, or nothing is.

    Args:
        session: SQLAlchemy session
        name: Original file name
        content: Full digest text
        articles: Segmented articles, in order

    Returns:
        ID of the new file row
    """
    try:
        digest_file = DigestFile(name=name, content=content)
        session.add(digest_file)
        session.flush()

        count = 0
        for article in articles:
            session.add(
                Article(
                    file_id=digest_file.id,
                    title=article.title,
                    category=article.category,
                    date=article.date,
                    content=article.content,
                )
            )
            count += 1

        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error saving file %s with articles", name)
        raise

    logger.info("Saved file %s (id=%d) with %d articles", name, digest_file.id, count)
    return digest_file.id


def get_all_files(session: Session) -> list[DigestFile]:
    """Return all files, newest first."""
    stmt = select(DigestFile).order_by(DigestFile.created_at.desc(), DigestFile.id.desc())
    return list(session.scalars(stmt).all())


def get_file_by_id(session: Session, file_id: int) -> DigestFile | None:
    return session.get(DigestFile, file_id)


def delete_file(session: Session, file_id: int) -> bool:
    """Delete a file together with its articles and their bookmarks."""
    digest_file = session.get(DigestFile, file_id)
    if digest_file is None:
        return False
    session.delete(digest_file)
    session.commit()
    logger.info("Deleted file %d", file_id)
    return True


def get_articles_by_file_id(session: Session, file_id: int) -> list[Article]:
    """Return a file's articles in the order they appeared in the digest."""
    stmt = _select_articles().where(Article.file_id == file_id).order_by(Article.id.asc())
    return list(session.scalars(stmt).all())


def get_all_articles(session: Session) -> list[Article]:
    """Return all articles, most recent first."""
    stmt = _select_articles().order_by(Article.created_at.desc(), Article.id.desc())
    return list(session.scalars(stmt).all())


def get_article_by_id(session: Session, article_id: int) -> Article | None:
    stmt = _select_articles().where(Article.id == article_id)
    return session.scalars(stmt).first()


def search_articles(session: Session, term: str) -> list[Article]:
    """Case-insensitive substring search over title and content, most recent first."""
    stmt = (
        _select_articles()
        .where(
            or_(
                Article.title.icontains(term, autoescape=True),
                Article.content.icontains(term, autoescape=True),
            )
        )
        .order_by(Article.created_at.desc(), Article.id.desc())
    )
    return list(session.scalars(stmt).all())


def bookmark_article(session: Session, article_id: int, notes: str = "") -> Bookmark:
    """Bookmark an article, replacing the notes of an existing bookmark.

    Raises:
        LookupError: If the article does not exist.
    """
    if session.get(Article, article_id) is None:
        raise LookupError(f"Article with ID {article_id} not found")

    bookmark = session.scalars(
        select(Bookmark).where(Bookmark.article_id == article_id)
    ).first()

    if bookmark is None:
        bookmark = Bookmark(article_id=article_id, notes=notes)
        session.add(bookmark)
    else:
        bookmark.notes = notes
        bookmark.created_at = utcnow()

    session.commit()
    return bookmark


def remove_bookmark(session: Session, article_id: int) -> bool:
    bookmark = session.scalars(
        select(Bookmark).where(Bookmark.article_id == article_id)
    ).first()
    if bookmark is None:
        return False
    session.delete(bookmark)
    session.commit()
    return True


def get_bookmarked_articles(session: Session) -> list[tuple[Article, Bookmark]]:
    """Return (article, bookmark) pairs, most recently bookmarked first."""
    stmt = (
        select(Article, Bookmark)
        .join(Bookmark, Bookmark.article_id == Article.id)
        .options(joinedload(Article.file))
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
    )
    return [(article, bookmark) for article, bookmark in session.execute(stmt).all()]


def is_article_bookmarked(session: Session, article_id: int) -> bool:
    stmt = select(Bookmark.id).where(Bookmark.article_id == article_id)
    return session.scalars(stmt).first() is not None
