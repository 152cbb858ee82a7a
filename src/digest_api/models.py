"""Pydantic request and response models for the digest API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str
    database: str


class FileCreateRequest(BaseModel):
    """Digest upload: file name and full text."""

    name: str
    content: str


class FileCreateResponse(BaseModel):
    file_id: int
    article_count: int


class FileSummaryResponse(BaseModel):
    """Stored file without its text."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class ArticleResponse(BaseModel):
    """Stored article response model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    file_id: int
    file_name: str | None = None
    title: str
    category: str | None = None
    date: str | None = None
    content: str
    created_at: datetime


class FileDetailResponse(FileSummaryResponse):
    """Stored file with its text and articles."""

    content: str
    articles: list[ArticleResponse] = Field(default_factory=list)


class BookmarkRequest(BaseModel):
    article_id: int
    notes: str = ""


class BookmarkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    article_id: int
    notes: str
    created_at: datetime


class BookmarkedArticleResponse(ArticleResponse):
    """Article with the bookmark that points at it."""

    bookmark_id: int
    notes: str
    bookmarked_at: datetime


class BookmarkStatusResponse(BaseModel):
    is_bookmarked: bool


class BookmarkRemovedResponse(BaseModel):
    removed: bool
