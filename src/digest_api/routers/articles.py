"""Article endpoints: list, search, detail, export."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from digest_api.dependencies import get_session
from digest_api.models import ArticleResponse
from digest_store import repository
from segment_digest.export import format_article_text

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("", response_model=list[ArticleResponse])
def list_articles(
    session: Annotated[Session, Depends(get_session)],
    file_id: Annotated[int | None, Query(description="Only articles from this file")] = None,
    search: Annotated[str | None, Query(description="Case-insensitive text in title or content")] = None,
):
    """List articles.

    A search term takes precedence over file_id; with neither, every stored
    article is returned, most recent first.
    """
    if search:
        articles = repository.search_articles(session, search)
    elif file_id is not None:
        articles = repository.get_articles_by_file_id(session, file_id)
    else:
        articles = repository.get_all_articles(session)

    return [ArticleResponse.model_validate(a) for a in articles]


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(article_id: int, session: Annotated[Session, Depends(get_session)]):
    article = repository.get_article_by_id(session, article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return ArticleResponse.model_validate(article)


@router.get("/{article_id}/export", response_class=PlainTextResponse)
def export_article(article_id: int, session: Annotated[Session, Depends(get_session)]):
    """Title and content as plain text, for handing off to other tools."""
    article = repository.get_article_by_id(session, article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return format_article_text(article.title, article.content)
