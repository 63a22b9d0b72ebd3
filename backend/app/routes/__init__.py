"""API routes."""

from .applications import router as applications_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .jobs import router as jobs_router
from .payments import router as payments_router
from .profiles import router as profiles_router

__all__ = [
    "auth_router",
    "profiles_router",
    "jobs_router",
    "applications_router",
    "payments_router",
    "dashboard_router",
]
