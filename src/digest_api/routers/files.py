"""Digest file endpoints: upload, list, detail, delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from digest_api.dependencies import get_segmenter, get_session
from digest_api.models import (
    FileCreateRequest,
    FileCreateResponse,
    FileDetailResponse,
    FileSummaryResponse,
)
from digest_store import repository
from segment_digest.segment import Segmenter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])

NO_ARTICLES_MESSAGE = (
    "No articles found in the uploaded file. Make sure the file contains "
    "articles with the correct header format."
)


@router.post("", response_model=FileCreateResponse)
def create_file(
    body: FileCreateRequest,
    session: Annotated[Session, Depends(get_session)],
    segmenter: Annotated[Segmenter, Depends(get_segmenter)],
):
    """Segment an uploaded digest and store it with its articles.

    The file and all of its articles are stored together or not at all.
    """
    if not body.name.strip() or not body.content.strip():
        raise HTTPException(status_code=400, detail="Missing required fields")

    articles = segmenter.segment(body.content)
    if not articles:
        raise HTTPException(status_code=422, detail=NO_ARTICLES_MESSAGE)

    file_id = repository.save_file_with_articles(session, body.name, body.content, articles)
    return FileCreateResponse(file_id=file_id, article_count=len(articles))


@router.get("", response_model=list[FileSummaryResponse])
def list_files(session: Annotated[Session, Depends(get_session)]):
    """List stored files, newest first."""
    return [FileSummaryResponse.model_validate(f) for f in repository.get_all_files(session)]


@router.get("/{file_id}", response_model=FileDetailResponse)
def get_file(file_id: int, session: Annotated[Session, Depends(get_session)]):
    digest_file = repository.get_file_by_id(session, file_id)
    if digest_file is None:
        raise HTTPException(status_code=404, detail="File not found")
    return FileDetailResponse.model_validate(digest_file)


@router.delete("/{file_id}", status_code=204)
def delete_file(file_id: int, session: Annotated[Session, Depends(get_session)]):
    """Delete a file; its articles and bookmarks go with it."""
    if not repository.delete_file(session, file_id):
        raise HTTPException(status_code=404, detail="File not found")
