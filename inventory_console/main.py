"""Main FastAPI application."""

import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory_console.api.deps import get_db
from inventory_console.api.v1 import api_router
from inventory_console.api.v1.endpoints import auth
from inventory_console.config import settings
from inventory_console.gateway import GatewayError, SoftDeleteError, get_gateway
from inventory_console.middleware.session import SessionMiddleware
from inventory_console.services.record_service import RecordServiceError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Inventory Console",
    description="Equipment, logs, users and assets behind an email-link sign-in",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SessionMiddleware)


@app.exception_handler(SoftDeleteError)
async def _soft_delete_exception_handler(request: Request, exc: SoftDeleteError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": f"Delete failed, nothing was removed: {exc}"},
    )


@app.exception_handler(GatewayError)
async def _gateway_exception_handler(request: Request, exc: GatewayError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


@app.exception_handler(RecordServiceError)
async def _record_exception_handler(request: Request, exc: RecordServiceError):
    logger.error(f"Unhandled record error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(api_router, prefix="/v1")


@app.get("/health")
def health_check(db=Depends(get_db)):
    """Health check endpoint."""
    gateway_status = "disconnected"
    try:
        gateway = get_gateway(db)
        try:
            if gateway.test_connection():
                gateway_status = "connected"
        finally:
            gateway.close()
    except GatewayError as e:
        gateway_status = f"error: {str(e)}"

    return {
        "status": "ok" if gateway_status == "connected" else "degraded",
        "gateway": settings.gateway_provider,
        "store": gateway_status,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "inventory_console.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
