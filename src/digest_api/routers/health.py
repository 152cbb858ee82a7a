"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from digest_api.dependencies import get_database
from digest_api.models import HealthResponse
from digest_store.connection import Database

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(database: Annotated[Database, Depends(get_database)]):
    """Report service status and the database version."""
    return HealthResponse(status="ok", database=database.version())
