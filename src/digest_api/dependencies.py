"""FastAPI dependencies shared by the routers."""

from typing import Annotated, Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from digest_store.connection import Database
from segment_digest.segment import Segmenter


def get_database(request: Request) -> Database:
    """Database owned by the running app."""
    return request.app.state.database


def get_segmenter(request: Request) -> Segmenter:
    return request.app.state.segmenter


def get_session(database: Annotated[Database, Depends(get_database)]) -> Iterator[Session]:
    """Session per request, closed when the request is done."""
    with database.session() as session:
        yield session
