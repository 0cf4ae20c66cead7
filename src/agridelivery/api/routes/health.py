"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(request: Request) -> dict:
    """Simple health check endpoint that doesn't touch the state store."""
    store = getattr(request.app.state, "store", None)
    return {
        "status": "ok",
        "storage_backend": settings.storage_backend,
        "store": type(store).__name__ if store is not None else None,
    }
