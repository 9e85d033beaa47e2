"""API v1 router."""

from fastapi import APIRouter

from inventory_console.api.v1.endpoints import (
    assets,
    console,
    equipment,
    health,
    logs,
    reports,
    summary,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(equipment.router, prefix="/equipment", tags=["equipment"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
api_router.include_router(summary.router, prefix="/summary", tags=["summary"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(console.router, prefix="/console", tags=["console"])
