"""Job routes.

Employers post jobs and move them through their lifecycle; freelancers
browse open jobs and apply.
"""

from fastapi import APIRouter, Query, Request, status

from gigboard.logging_config import log_application_event, log_job_event
from gigboard.marketplace.jobs.service import JobSearchFilters

from ..auth import CurrentProfile
from ..database import MarketplaceDep
from ..logging_config import get_logger
from ..models import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    AppliedResponse,
    JobCreate,
    JobListResponse,
    JobResponse,
    JobStatusUpdate,
)
from ..rate_limit import limiter

logger = get_logger("gigboard.api.jobs")
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("20/minute")
async def create_job(
    request: Request,
    body: JobCreate,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """
    Post a new job.

    Only employers can post. Jobs start in 'open' status.
    """
    logger.info(f"POST /jobs | employer={profile.id} | title={body.title[:50]}")
    job = market.jobs.create_job(
        profile,
        title=body.title,
        description=body.description,
        budget=body.budget,
        skills=body.required_skills,
    )
    log_job_event(profile.id, job.id, job.status)
    return JobResponse.from_job(job, profile)


@router.get("", response_model=JobListResponse)
@limiter.limit("60/minute")
async def list_jobs(
    request: Request,
    profile: CurrentProfile,
    market: MarketplaceDep,
    status_filter: str | None = Query(None, alias="status"),
    skills: list[str] | None = Query(None),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
):
    """
    List jobs, newest first.

    Employers see their own postings; freelancers see open jobs. Both can
    narrow by status and by skills (jobs matching ANY skill).
    """
    logger.info(f"GET /jobs | user={profile.id} | status={status_filter}")
    filters = JobSearchFilters(status=status_filter, skills=skills, limit=limit, offset=offset)
    listings = market.jobs.list_job_listings(profile, filters)
    return JobListResponse(
        jobs=[JobResponse.from_listing(listing) for listing in listings],
        limit=market.jobs.config.clamp_limit(limit),
        offset=offset,
    )


@router.get("/{job_id}", response_model=JobResponse)
@limiter.limit("60/minute")
async def get_job(
    request: Request,
    job_id: str,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """Details of one job with its employer."""
    job = market.jobs.get_job(job_id)
    return JobResponse.from_job(job, market.profiles.storage.get_profile(job.employer_id))


@router.post("/{job_id}/status", response_model=JobResponse)
@limiter.limit("20/minute")
async def update_job_status(
    request: Request,
    job_id: str,
    body: JobStatusUpdate,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """
    Move a job to a new status.

    Allowed: open -> in_progress -> completed, and cancellation from open
    or in_progress. Only the job's employer can do this.
    """
    logger.info(f"POST /jobs/{job_id}/status | user={profile.id} | status={body.status}")
    job = market.jobs.get_job(job_id)
    job = market.jobs.transition_job(job, body.status, profile)
    log_job_event(profile.id, job.id, job.status)
    return JobResponse.from_job(job)


@router.post(
    "/{job_id}/applications",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit("30/minute")
async def apply_to_job(
    request: Request,
    job_id: str,
    body: ApplicationCreate,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """
    Apply to a job.

    Freelancers only, one application per job.
    """
    logger.info(f"POST /jobs/{job_id}/applications | freelancer={profile.id}")
    job = market.jobs.get_job(job_id)
    application = market.jobs.submit_application(
        profile, job, cover_letter=body.cover_letter, proposed_rate=body.proposed_rate
    )
    log_application_event(profile.id, application.id, job.id, application.status)
    return ApplicationResponse.from_application(application)


@router.get("/{job_id}/applications", response_model=ApplicationListResponse)
@limiter.limit("30/minute")
async def list_job_applications(
    request: Request,
    job_id: str,
    profile: CurrentProfile,
    market: MarketplaceDep,
    limit: int | None = Query(None, ge=1),
):
    """
    Applications received for a job, newest first.

    Only the job's employer can view them.
    """
    logger.info(f"GET /jobs/{job_id}/applications | user={profile.id}")
    job = market.jobs.get_job(job_id)
    listings = market.jobs.list_application_listings_for_job(profile, job, limit)
    return ApplicationListResponse(
        applications=[ApplicationResponse.from_listing(listing) for listing in listings],
        total=len(listings),
    )


@router.get("/{job_id}/applied", response_model=AppliedResponse)
@limiter.limit("60/minute")
async def check_applied(
    request: Request,
    job_id: str,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """Whether the caller already applied to this job."""
    job = market.jobs.get_job(job_id)
    return AppliedResponse(job_id=job.id, applied=market.jobs.has_applied(profile, job))
