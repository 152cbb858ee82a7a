"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from digest_api.routers import articles, bookmarks, files, health
from digest_store.connection import Database
from segment_digest.config_loader import DigestConfig, load_config
from segment_digest.segment import Segmenter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.database.create_tables()
    yield
    app.state.database.close()


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": f"Database error: {exc}"})


def create_app(config: DigestConfig | None = None, database: Database | None = None) -> FastAPI:
    """Build the app around an explicit config and database.

    When no database is given one is created from the config; either way the
    app closes it on shutdown.
    """
    config = config or load_config()
    database = database or Database(config.database.url, echo=config.database.echo)

    app = FastAPI(
        title="Digest API",
        description="Segment digest files into articles, then browse, search and bookmark them",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.database = database
    app.state.segmenter = Segmenter(config.segment)

    app.add_exception_handler(SQLAlchemyError, handle_database_error)

    # Register routers
    app.include_router(health.router)
    app.include_router(files.router)
    app.include_router(articles.router)
    app.include_router(bookmarks.router)

    @app.get("/")
    async def root():
        """API root - returns basic info."""
        return {
            "name": "Digest API",
            "version": "1.0.0",
            "docs": "/docs",
        }

    return app


def main():
    """Run the API server."""
    import uvicorn

    from common.cli_helpers import setup_logging

    setup_logging()
    config = load_config()
    # The server and the app share one loaded config
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
    )


if __name__ == "__main__":
    main()
