"""Gigboard Backend API - FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from gigboard.logging_config import setup_gigboard_logging
from gigboard.marketplace.errors import MarketplaceError

from .config import get_settings
from .logging_config import get_logger
from .rate_limit import limiter
from .routes import (
    applications_router,
    auth_router,
    dashboard_router,
    jobs_router,
    payments_router,
    profiles_router,
)

logger = get_logger("gigboard.api")

API_PREFIX = "/api/v1"

ERROR_STATUS = {
    "validation_error": 400,
    "authorization_error": 403,
    "not_found": 404,
    "duplicate_application": 409,
    "invalid_transition": 409,
    "store_unavailable": 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    if settings.log_to_file:
        setup_gigboard_logging(level=settings.log_level)
    logger.info(f"Starting Gigboard Backend API (debug={settings.debug})")
    yield
    logger.info("Shutting down Gigboard Backend API")


app = FastAPI(
    title="Gigboard Backend API",
    description="Freelance marketplace: jobs, applications and payments",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    """Map marketplace failures to HTTP status codes."""
    status_code = ERROR_STATUS.get(exc.kind, 400)
    body = exc.to_dict()
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} | {exc.kind} | {exc.message}")
        body["detail"] = "Data store temporarily unavailable"
    else:
        logger.info(f"{request.method} {request.url.path} | {exc.kind} | {exc.message}")
    return JSONResponse(status_code=status_code, content=body)


# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(profiles_router, prefix=API_PREFIX)
app.include_router(jobs_router, prefix=API_PREFIX)
app.include_router(applications_router, prefix=API_PREFIX)
app.include_router(payments_router, prefix=API_PREFIX)
app.include_router(dashboard_router, prefix=API_PREFIX)


@app.get("/")
async def root():
    """Service banner."""
    return {
        "service": "gigboard-backend",
        "version": "0.1.0",
        "status": "ok",
    }


@app.get("/health")
async def health():
    """Health check with a real database round trip."""
    from .database import get_supabase_client

    db_status = "disconnected"
    try:
        db = get_supabase_client()
        db.table("profiles").select("id").limit(1).execute()
        db_status = "connected"
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        db_status = f"error: {str(e)[:50]}"

    overall_status = "healthy" if db_status == "connected" else "degraded"

    return {
        "status": overall_status,
        "database": db_status,
    }
