"""Application routes for both sides of a bid."""

from fastapi import APIRouter, Query, Request

from gigboard.logging_config import log_application_event

from ..auth import CurrentProfile
from ..database import MarketplaceDep
from ..logging_config import get_logger
from ..models import ApplicationDecision, ApplicationListResponse, ApplicationResponse
from ..rate_limit import limiter

logger = get_logger("gigboard.api.applications")
router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("/me", response_model=ApplicationListResponse)
@limiter.limit("60/minute")
async def list_my_applications(
    request: Request,
    profile: CurrentProfile,
    market: MarketplaceDep,
    limit: int | None = Query(None, ge=1),
):
    """The freelancer's own applications with each job and its employer."""
    logger.info(f"GET /applications/me | freelancer={profile.id}")
    listings = market.jobs.list_application_listings_for_freelancer(profile, limit)
    return ApplicationListResponse(
        applications=[ApplicationResponse.from_listing(listing) for listing in listings],
        total=len(listings),
    )


@router.post("/{application_id}/decision", response_model=ApplicationResponse)
@limiter.limit("30/minute")
async def decide_application(
    request: Request,
    application_id: str,
    body: ApplicationDecision,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """
    Accept or reject a pending application.

    Only the employer who owns the job can decide. Deciding one
    application leaves the others and the job untouched.
    """
    logger.info(
        f"POST /applications/{application_id}/decision | user={profile.id} | "
        f"decision={body.decision}"
    )
    application = market.jobs.get_application(application_id)
    application = market.jobs.decide_application(profile, application, body.decision)
    log_application_event(profile.id, application.id, application.job_id, application.status)
    return ApplicationResponse.from_application(application)
