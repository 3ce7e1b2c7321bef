# src/classifieds/main.py
"""Main entry point for the classifieds application."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from classifieds.api.v1 import (
    conversations_router,
    messages_router,
    posts_router,
    system_router,
    users_router,
)
from classifieds.core.errors import ServiceUnavailable, register_exception_handlers
from classifieds.core.settings import settings
from classifieds.db.session import create_tables, database_ready

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Classifieds marketplace: ads, buyer/seller conversations and messages",
    version=settings.app_version,
)

# Swappable so tests and deployments can supply their own check.
app.state.readiness_probe = database_ready


async def require_ready_database(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Reject every request with 503 while the database is unreachable."""
    probe: Callable[[], bool] = request.app.state.readiness_probe
    if not await run_in_threadpool(probe):
        error = ServiceUnavailable("Service unavailable")
        return JSONResponse(status_code=error.status_code, content=error.to_payload())
    return await call_next(request)


# Added first so it runs inside CORS and its 503 keeps the CORS headers.
app.add_middleware(BaseHTTPMiddleware, dispatch=require_ready_database)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

register_exception_handlers(app)


# Include API routers
app.include_router(users_router)
app.include_router(posts_router)
app.include_router(conversations_router)
app.include_router(messages_router)
app.include_router(system_router)


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.create_tables_on_startup:
        await run_in_threadpool(create_tables)
    logger.info("%s %s started", settings.app_name, settings.app_version)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("classifieds.main:app", host=settings.host, port=settings.port, reload=settings.debug)
