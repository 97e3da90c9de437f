"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/config", status_code=status.HTTP_200_OK)
def health_config() -> dict:
    """Expose the non-secret settings the planners run with."""
    return {
        "app_name": settings.app_name,
        "log_level": settings.log_level,
        "restricted_statuses": list(settings.restricted_statuses),
    }
