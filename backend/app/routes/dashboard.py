"""Dashboard route."""

from fastapi import APIRouter, Request

from gigboard.marketplace.dashboard import compute_dashboard

from ..auth import CurrentProfile
from ..database import MarketplaceDep
from ..logging_config import get_logger
from ..models import DashboardResponse
from ..rate_limit import limiter

logger = get_logger("gigboard.api.dashboard")
router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
@limiter.limit("60/minute")
async def get_dashboard(request: Request, profile: CurrentProfile, market: MarketplaceDep):
    """Headline numbers for the caller's role."""
    logger.info(f"GET /dashboard | user={profile.id} | role={profile.role}")
    stats = compute_dashboard(profile, market.jobs.storage, market.ledger)
    return DashboardResponse(
        role=profile.role,
        total_jobs=stats.total_jobs,
        total_applications=stats.total_applications,
        accepted_applications=stats.accepted_applications,
        total_payments=stats.total_payments,
    )
