"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single ``httpx.AsyncClient`` (shared across all
requests via ``request.app.state.http_client``) for link probing.  On
shutdown it closes the client cleanly.

Routers
-------
All endpoint groups are mounted under ``/api``:

    /api/parse-document   — uploaded file → {text, title, links}
    /api/fetch-document   — URL → {text, title, links}
    /api/check-links      — link health check for a piece of content
    /api/evaluate         — E-E-A-T / Helpful Content evaluation
    /api/compare          — comparison against competing articles
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from content_eval.config import configure_logging
from content_eval.api.routers import documents as documents_router
from content_eval.api.routers import evaluate as evaluate_router
from content_eval.api.routers import links as links_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared HTTP client on startup and close it on shutdown."""
    client = httpx.AsyncClient()
    app.state.http_client = client
    try:
        yield
    finally:
        await client.aclose()


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with the field errors."""
    logger.info("[api] invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="Content Evaluator API",
        description=(
            "Document ingestion, link health checks, and LLM-backed E-E-A-T / "
            "Helpful Content evaluation and comparative analysis."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]

    app.include_router(documents_router.router, prefix="/api", tags=["documents"])
    app.include_router(links_router.router, prefix="/api", tags=["links"])
    app.include_router(evaluate_router.router, prefix="/api", tags=["evaluate"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn content_eval.api.app:app --reload
app = create_app()
