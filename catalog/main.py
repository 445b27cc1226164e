"""
Catalog Application

Builds the FastAPI app that serves the library catalog pages.

    uvicorn catalog.main:app --port 3000
    python -m catalog.main

Structure:
=============

1. create_app() wires the routers, the health check and the error pages;
   tests import the module-level app and override its repository dependency.

2. The lifespan creates any missing tables on startup (unless
   AUTO_CREATE_TABLES is off, e.g. when Alembic manages the schema) and
   releases the engine's connections on shutdown.

3. Expected conditions (invalid form, blocked delete, missing record,
   database failure inside a workflow) are outcomes rendered by
   catalog.rendering.respond(). The handlers below only see what escapes a
   route.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from catalog import __version__
from catalog.config import get_settings
from catalog.database import create_tables, engine
from catalog.rendering import render_error
from catalog.routers import (
    authors_router,
    bookinstances_router,
    books_router,
    catalog_router,
    genres_router,
)

settings = get_settings()

# One root configuration; modules log through logging.getLogger(__name__)
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(f"{settings.app_name} starting ({settings.environment}, debug={settings.debug})")

    if settings.auto_create_tables:
        create_tables()
        logger.info("Catalog tables ready")

    yield

    logger.info(f"{settings.app_name} stopping")
    engine.dispose()


def create_app() -> FastAPI:
    """
    Assemble the catalog application.

    Returns:
        FastAPI app with the catalog routers and error pages registered
    """
    app = FastAPI(
        title=settings.app_name,
        description="Local library catalog: books, authors, genres and copies.",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Error pages
    # -------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> HTMLResponse:
        """
        A malformed or out-of-range path id (e.g. /catalog/book/abc) names no page.

        Form bodies are validated by the workflows, so this only sees path
        and query parameters.
        """
        logger.debug(f"Unmatched request {request.url.path}: {exc.errors()}")
        return render_error(request, status.HTTP_404_NOT_FOUND, "Page not found")

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> HTMLResponse:
        """Database error raised outside a workflow; logged, never shown."""
        logger.error(f"Database error on {request.url.path}: {exc}")
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "A database error occurred. Please try again later.",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> HTMLResponse:
        """Anything else: generic page, with the exception text only in debug mode."""
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred.",
            str(exc) if settings.debug else None,
        )

    # -------------------------------------------------------------------------
    # Catalog pages
    # -------------------------------------------------------------------------
    app.include_router(catalog_router)
    app.include_router(books_router)
    app.include_router(bookinstances_router)
    app.include_router(authors_router)
    app.include_router(genres_router)

    # -------------------------------------------------------------------------
    # Health check and site root
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Report that the catalog process is up.",
    )
    async def health_check() -> dict:
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
        }

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        """The site has no front page of its own; send visitors to the catalog."""
        return RedirectResponse("/catalog", status_code=status.HTTP_303_SEE_OTHER)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
