"""System endpoints for the classifieds API."""

from __future__ import annotations

from fastapi import APIRouter

from classifieds.core.settings import settings

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint; only reachable while the database is ready."""
    return {"status": "ok", "version": settings.app_version}
