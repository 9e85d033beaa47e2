"""Liveness endpoint."""

from fastapi import APIRouter

from inventory_console import __version__

router = APIRouter()


@router.get("/healthz")
def healthz():
    """Liveness probe; does not touch the data store."""
    return {"status": "ok", "version": __version__}
