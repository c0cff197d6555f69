"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging and opens a single
``httpx.AsyncClient`` (shared across all requests via
``request.app.state.http_client``).  On shutdown it closes the client, which
carries no per-request state.

Routers
-------
    /               — static HTML documentation
    /api/Digilaw    — page / companies text extraction, health check

Errors
------
Pipeline exceptions are mapped to JSON bodies here so the routes stay free of
try/except blocks:

    ValidationError           → 400 {"error"}
    PublicationNotFoundError  → 404 {"error", "message"}
    other DigilawError        → 500 {"error", "message"}
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from digilaw import __version__
from digilaw.bulletin.fetcher import build_client
from digilaw.config import configure_logging
from digilaw.errors import DigilawError, PublicationNotFoundError, ValidationError

from digilaw.api.routers import digilaw as digilaw_router
from digilaw.api.routers import docs as docs_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and open the HTTP client on startup; close it on shutdown."""
    configure_logging()
    client = build_client()
    app.state.http_client = client
    try:
        yield
    finally:
        await client.aclose()


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _not_found_error(request: Request, exc: PublicationNotFoundError) -> JSONResponse:
    logger.warning("No publication available: %s", exc)
    return JSONResponse(
        status_code=404,
        content={"error": "No publication available", "message": str(exc)},
    )


async def _processing_error(request: Request, exc: DigilawError) -> JSONResponse:
    logger.error("Error processing PDF for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to process PDF", "message": str(exc)},
    )


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Digilaw API",
        description=(
            "Extracts text from the latest Moroccan Bulletin Officiel PDF, "
            "either from one page or from the first pages of the document."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(PublicationNotFoundError, _not_found_error)
    app.add_exception_handler(DigilawError, _processing_error)

    app.include_router(docs_router.router)
    app.include_router(digilaw_router.router, prefix="/api/Digilaw", tags=["digilaw"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn digilaw.api.app:app --reload
app = create_app()
