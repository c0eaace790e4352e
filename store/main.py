"""
Development Section Store.

An in-memory implementation of the REST surface the admin consumes, so the
admin can be run and tested end to end without the production backend.

    uvicorn store.main:app --port 4202
    cms-store
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin.errors import StoreError
from admin.stores.memory import MemorySectionStore
from content.kernel.validator import field_path
from store.routes import media as media_routes
from store.routes import pages as pages_routes
from store.routes import sections as sections_routes
from store.seed import seed_demo

logger = logging.getLogger(__name__)


def _error_body(message: str, details: list[dict[str, str]] | None = None) -> dict:
    body: dict = {"error": message}
    if details:
        body["details"] = details
    return body


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status or 500,
        content=_error_body(exc.message, [d.to_dict() for d in exc.details]),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the same 400 shape as invalid payloads."""
    details = []
    for err in exc.errors():
        # Drop the leading "body" / "path" segment.
        loc = tuple(err.get("loc", ()))[1:]
        details.append({"field": field_path(loc), "message": err.get("msg", "")})
    return JSONResponse(status_code=400, content=_error_body("Invalid request", details))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(str(exc.detail)))


def create_app(store: MemorySectionStore | None = None, *, seed: bool = False) -> FastAPI:
    """
    Build the app around `store` (a fresh in-memory store if None).
    `seed` loads the demo "home" page.
    """
    if store is None:
        store = MemorySectionStore()
    if seed:
        seed_demo(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Section Store ready (%d pages)", len(store.titles))
        yield
        await store.close()

    app = FastAPI(
        title="CMS Section Store (development)",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Register routes
    app.include_router(pages_routes.router)
    app.include_router(sections_routes.router)
    app.include_router(media_routes.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app(seed=os.environ.get("CMS_STORE_SEED", "true").lower() not in ("0", "false", "no"))


def serve() -> None:
    """Run the development store with uvicorn."""
    import uvicorn

    logging.basicConfig(level=os.environ.get("CMS_LOG_LEVEL", "INFO").upper())
    uvicorn.run(
        app,
        host=os.environ.get("CMS_STORE_HOST", "127.0.0.1"),
        port=int(os.environ.get("CMS_STORE_PORT", "4202")),
    )


if __name__ == "__main__":
    serve()
