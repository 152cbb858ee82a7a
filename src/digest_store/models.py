"""SQLAlchemy models for stored digests, articles and bookmarks."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DigestFile(Base):
    """An uploaded digest, stored once with its full text."""
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    articles = relationship(
        "Article",
        back_populates="file",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Article.id",
    )


class Article(Base):
    """One article segmented out of a digest file."""
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    file_id = Column(Integer, ForeignKey("files.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    category = Column(Text)
    date = Column(Text)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    file = relationship("DigestFile", back_populates="articles")
    bookmark = relationship(
        "Bookmark",
        back_populates="article",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def file_name(self) -> str | None:
        return self.file.name if self.file is not None else None


class Bookmark(Base):
    """User bookmark on an article; at most one per article."""
    __tablename__ = "bookmarks"
    __table_args__ = (UniqueConstraint("article_id", name="uq_bookmarks_article_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    article = relationship("Article", back_populates="bookmark")
