"""Bookmark endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from digest_api.dependencies import get_session
from digest_api.models import (
    ArticleResponse,
    BookmarkedArticleResponse,
    BookmarkRemovedResponse,
    BookmarkRequest,
    BookmarkResponse,
    BookmarkStatusResponse,
)
from digest_store import repository

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("", response_model=BookmarkResponse)
def add_bookmark(body: BookmarkRequest, session: Annotated[Session, Depends(get_session)]):
    """Add a bookmark, or replace the notes of an existing one."""
    try:
        bookmark = repository.bookmark_article(session, body.article_id, body.notes)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return BookmarkResponse.model_validate(bookmark)


@router.get("", response_model=list[BookmarkedArticleResponse])
def list_bookmarks(session: Annotated[Session, Depends(get_session)]):
    """Bookmarked articles, most recently bookmarked first."""
    results = []
    for article, bookmark in repository.get_bookmarked_articles(session):
        data = ArticleResponse.model_validate(article).model_dump()
        results.append(
            BookmarkedArticleResponse(
                **data,
                bookmark_id=bookmark.id,
                notes=bookmark.notes,
                bookmarked_at=bookmark.created_at,
            )
        )
    return results


@router.get("/{article_id}", response_model=BookmarkStatusResponse)
def bookmark_status(article_id: int, session: Annotated[Session, Depends(get_session)]):
    return BookmarkStatusResponse(is_bookmarked=repository.is_article_bookmarked(session, article_id))


@router.delete("/{article_id}", response_model=BookmarkRemovedResponse)
def delete_bookmark(article_id: int, session: Annotated[Session, Depends(get_session)]):
    return BookmarkRemovedResponse(removed=repository.remove_bookmark(session, article_id))
