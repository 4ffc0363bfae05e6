"""RentTrackr Property Management Backend - Main Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import RentTrackrException
from .core.logging import (
    RequestIdMiddleware,
    get_logger,
    setup_logging,
    shutdown_logging,
)

# Import routers
from .modules.dashboard import router as dashboard_router
from .modules.expenses import router as expenses_router
from .modules.financials import router as financials_router
from .modules.leases import router as leases_router
from .modules.messaging import router as messaging_router
from .modules.onboarding import router as onboarding_router
from .modules.owners.routers import router as owners_router
from .modules.parking import router as parking_router
from .modules.payments import router as payments_router
from .modules.properties import router as properties_router
from .modules.properties import units_router
from .modules.renovations import router as renovations_router
from .modules.search import router as search_router
from .modules.tenants import router as tenants_router
from .modules.users.routers import router as users_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging()
    logger.info(f"Starting {settings.app_name} application...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Debug mode: {settings.app_debug}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name} application...")
    shutdown_logging()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description="Multi-tenant property management: properties, tenants, rent, "
    "expenses, renovations, parking and financial reports",
    version=settings.api_version,
    docs_url=f"{settings.api_prefix}/docs" if settings.app_debug else None,
    redoc_url=f"{settings.api_prefix}/redoc" if settings.app_debug else None,
    openapi_url=f"{settings.api_prefix}/openapi.json" if settings.app_debug else None,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "x-transaction-id"],
)

# Request ID middleware for request tracing
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(RentTrackrException)
async def renttrackr_exception_handler(request: Request, exc: RentTrackrException):
    """Handle application exceptions with their own status codes."""
    status_code = getattr(exc, "status_code", 400)
    if status_code >= 500:
        logger.error(
            exc.message,
            extra={"path": request.url.path, "details": exc.details},
        )
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": exc.message,
            "error": exc.details or exc.message,
            "data": None,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error": str(exc) if settings.app_debug else "Internal server error",
            "data": None,
        },
    )


@app.get(f"{settings.api_prefix}/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.api_version,
        "env": settings.app_env,
    }


API_PREFIX = settings.api_prefix

# Accounts and ownership
app.include_router(users_router, prefix=API_PREFIX)
app.include_router(owners_router, prefix=API_PREFIX)

# Portfolio
app.include_router(properties_router, prefix=API_PREFIX)
app.include_router(units_router, prefix=API_PREFIX)
app.include_router(tenants_router, prefix=API_PREFIX)
app.include_router(leases_router, prefix=API_PREFIX)

# Money
app.include_router(payments_router, prefix=API_PREFIX)
app.include_router(expenses_router, prefix=API_PREFIX)
app.include_router(financials_router, prefix=API_PREFIX)

# Operations
app.include_router(renovations_router, prefix=API_PREFIX)
app.include_router(parking_router, prefix=API_PREFIX)
app.include_router(messaging_router, prefix=API_PREFIX)

# Overview
app.include_router(dashboard_router, prefix=API_PREFIX)
app.include_router(onboarding_router, prefix=API_PREFIX)
app.include_router(search_router, prefix=API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "renttrackr_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
