"""Freelance marketplace core.

Profiles, jobs, applications and payments, with role and ownership
checks in ``guards`` and a single error taxonomy in ``errors``.
"""

from gigboard.marketplace.config import MarketplaceConfig
from gigboard.marketplace.errors import (
    AuthorizationError,
    DuplicateApplicationError,
    InvalidTransitionError,
    MarketplaceError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from gigboard.marketplace.profiles import Profile, ProfileRole, ProfileService
from gigboard.marketplace.jobs import (
    ApplicationStatus,
    Job,
    JobApplication,
    JobSearchFilters,
    JobService,
    JobStatus,
)
from gigboard.marketplace.payments import Payment, PaymentLedger, PaymentStatus, total_completed
from gigboard.marketplace.dashboard import DashboardStats, compute_dashboard

__all__ = [
    "MarketplaceConfig",
    # Errors
    "MarketplaceError",
    "ValidationError",
    "AuthorizationError",
    "InvalidTransitionError",
    "DuplicateApplicationError",
    "NotFoundError",
    "StoreUnavailableError",
    # Profiles
    "Profile",
    "ProfileRole",
    "ProfileService",
    # Jobs
    "Job",
    "JobApplication",
    "JobStatus",
    "ApplicationStatus",
    "JobSearchFilters",
    "JobService",
    # Payments
    "Payment",
    "PaymentStatus",
    "PaymentLedger",
    "total_completed",
    # Dashboard
    "DashboardStats",
    "compute_dashboard",
]
