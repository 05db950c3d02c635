# src/stratizen_hub/main.py
"""Main entry point for the Stratizen Hub application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from stratizen_hub.api.v1 import (
    auth_router,
    ranks_router,
    resources_router,
    system_router,
    units_router,
    users_router,
    votes_router,
)
from stratizen_hub.core.settings import settings
from stratizen_hub.services.errors import (
    AuthenticationError,
    BackendUnavailableError,
    InvalidOperationError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Stratizen Hub API",
    description="Share notes, assignments and past papers; earn points and ranks",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(ranks_router, prefix="/api/v1")
app.include_router(units_router, prefix="/api/v1")
app.include_router(resources_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")

_STATUS_BY_ERROR: dict[type[ServiceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    InvalidOperationError: status.HTTP_400_BAD_REQUEST,
    BackendUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@app.exception_handler(ServiceError)
async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    """Translate domain exceptions into JSON error responses."""
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(OperationalError)
async def handle_database_outage(request: Request, exc: OperationalError) -> JSONResponse:
    """Report database connectivity failures as retryable."""
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    error = BackendUnavailableError()
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": error.message, "code": error.code},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("stratizen_hub.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
