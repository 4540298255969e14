"""
Health and build information endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter

from quickdesk.utils.settings import get_settings

SERVICE_NAME = "quickdesk-service"

router = APIRouter(tags=["support"])


@router.get("/health")
def health():
    """Liveness probe; answers without authentication."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": get_settings().version,
    }
