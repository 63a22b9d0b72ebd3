"""
Job service for the freelance marketplace.

Provides the job and application lifecycle:
- Employers post jobs (open) and move them through
  open -> in_progress -> completed, or cancel them while not yet finished
- Freelancers apply to jobs (one application per job)
- Employers accept or reject each pending application independently

The acting Profile is passed into every operation; authorization lives in
``gigboard.marketplace.guards``.
"""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Union

from gigboard.marketplace import guards
from gigboard.marketplace.config import DEFAULT_CONFIG, MarketplaceConfig
from gigboard.marketplace.errors import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from gigboard.marketplace.jobs.models import (
    APPLICATION_DECISIONS,
    ApplicationStatus,
    Job,
    JobApplication,
    JobStatus,
)
from gigboard.marketplace.jobs.storage import JobStorage
from gigboard.marketplace.profiles.models import Profile
from gigboard.marketplace.profiles.storage import ProfileStorage
from gigboard.marketplace.views import (
    ApplicationListing,
    JobListing,
    build_application_listings,
    build_job_listings,
)

logger = logging.getLogger(__name__)


@dataclass
class JobSearchFilters:
    """Filters for job listing.

    Fields left as None are filled from the caller's role: employers see
    their own postings, everyone else sees open jobs.
    """

    status: Optional[str] = None
    employer_id: Optional[str] = None
    skills: Optional[List[str]] = None
    limit: Optional[int] = None
    offset: int = 0


class JobService:
    """Service for job and application lifecycle operations."""

    def __init__(
        self,
        storage: JobStorage,
        config: Optional[MarketplaceConfig] = None,
        profiles: Optional[ProfileStorage] = None,
    ):
        """Initialize job service.

        Args:
            storage: Job storage backend
            config: Marketplace configuration
            profiles: Profile storage, needed only for joined listings
        """
        self.storage = storage
        self.config = config or DEFAULT_CONFIG
        self.profiles = profiles

    # =========================================================================
    # Jobs
    # =========================================================================

    def create_job(
        self,
        employer: Profile,
        title: str,
        description: str,
        budget: Union[Decimal, int, float, str],
        skills: Iterable[str],
    ) -> Job:
        """Create a new job posting in ``open`` status.

        Raises:
            ValidationError: Non-employer caller, budget <= 0, empty skills,
                blank title/description
        """
        guards.ensure_can_post_job(employer)

        job = Job(
            id=str(uuid.uuid4()),
            employer_id=employer.id,
            title=title,
            description=description,
            budget=budget,
            required_skills=list(skills or []),
            status=JobStatus.OPEN.value,
            max_title_length=self.config.max_title_length,
        )
        if len(job.required_skills) > self.config.max_skills:
            raise ValidationError(f"Too many skills (max {self.config.max_skills})")

        stored = self.storage.save_job(job)
        logger.info(f"Job created | id={stored.id} | employer={employer.id} | budget={stored.budget}")
        return stored

    def get_job(self, job_id: str) -> Job:
        """Get a job by ID.

        Raises:
            NotFoundError: If job doesn't exist
        """
        job = self.storage.get_job(job_id)
        if not job:
            raise NotFoundError("Job", job_id)
        return job

    def _resolve_filters(self, caller: Profile, filters: Optional[JobSearchFilters]) -> JobSearchFilters:
        filters = filters or JobSearchFilters()
        status = filters.status
        employer_id = filters.employer_id
        if caller.is_employer:
            if employer_id is None:
                employer_id = caller.id
        elif status is None:
            status = JobStatus.OPEN.value

        if status is not None:
            try:
                status = JobStatus(status.value if isinstance(status, JobStatus) else status).value
            except ValueError as e:
                raise ValidationError(f"Invalid job status filter: {status}") from e

        return JobSearchFilters(
            status=status,
            employer_id=employer_id,
            skills=filters.skills or None,
            limit=self.config.clamp_limit(filters.limit),
            offset=max(filters.offset or 0, 0),
        )

    def list_jobs(self, caller: Profile, filters: Optional[JobSearchFilters] = None) -> List[Job]:
        """List jobs visible to the caller, newest first.

        Employers default to their own postings; freelancers default to
        open jobs.
        """
        resolved = self._resolve_filters(caller, filters)
        return self.storage.list_jobs(
            status=resolved.status,
            employer_id=resolved.employer_id,
            skills=resolved.skills,
            limit=resolved.limit,
            offset=resolved.offset,
        )

    def list_job_listings(
        self, caller: Profile, filters: Optional[JobSearchFilters] = None
    ) -> List[JobListing]:
        """Like list_jobs, with each job joined to its employer profile."""
        jobs = self.list_jobs(caller, filters)
        return build_job_listings(jobs, self._require_profiles())

    def transition_job(self, job: Job, new_status: Any, actor: Profile) -> Job:
        """Move a job along its lifecycle.

        Allowed: open -> in_progress -> completed, open|in_progress -> cancelled.

        Raises:
            AuthorizationError: Actor is not the job's employer
            InvalidTransitionError: Transition not in the lifecycle table
            NotFoundError: Job vanished from the store
        """
        guards.ensure_job_owner(actor, job, action="change its status")

        target = new_status.value if isinstance(new_status, JobStatus) else new_status
        if not job.can_transition_to(target):
            raise InvalidTransitionError(f"Cannot move job from {job.status} to {target}")

        old_status = job.status
        updated = self.storage.update_job_status(
            job.id, JobStatus(target), expected_status=JobStatus(old_status)
        )
        if not updated:
            raise NotFoundError("Job", job.id)

        job.status = updated.status
        job.updated_at = updated.updated_at
        logger.info(f"Job transitioned | id={job.id} | {old_status} -> {job.status} | by={actor.id}")
        return job

    # =========================================================================
    # Applications
    # =========================================================================

    def get_application(self, application_id: str) -> JobApplication:
        """Get an application by ID.

        Raises:
            NotFoundError: If application doesn't exist
        """
        application = self.storage.get_application(application_id)
        if not application:
            raise NotFoundError("Application", application_id)
        return application

    def submit_application(
        self,
        freelancer: Profile,
        job: Job,
        cover_letter: str,
        proposed_rate: Union[Decimal, int, float, str],
    ) -> JobApplication:
        """Apply to a job as a freelancer.

        The one-application-per-job rule is enforced by the storage insert,
        so two concurrent submissions cannot both succeed.

        Raises:
            AuthorizationError: Caller is not a freelancer
            ValidationError: proposed_rate <= 0 or blank cover letter
            DuplicateApplicationError: Freelancer already applied to this job
        """
        guards.ensure_can_apply(freelancer)

        application = JobApplication(
            id=str(uuid.uuid4()),
            job_id=job.id,
            freelancer_id=freelancer.id,
            cover_letter=cover_letter,
            proposed_rate=proposed_rate,
            status=ApplicationStatus.PENDING.value,
        )

        stored = self.storage.insert_application(application)
        logger.info(
            f"Application submitted | id={stored.id} | job={job.id} | freelancer={freelancer.id}"
        )
        return stored

    def has_applied(self, freelancer: Profile, job: Job) -> bool:
        """Whether the freelancer already holds an application for the job."""
        return self.storage.find_application(job.id, freelancer.id) is not None

    def decide_application(
        self,
        employer: Profile,
        application: JobApplication,
        decision: Any,
    ) -> JobApplication:
        """Accept or reject a pending application.

        Each application is decided on its own: accepting one leaves the
        other applications for the job pending, and the job keeps its status.

        Raises:
            NotFoundError: Referenced job no longer exists
            AuthorizationError: Caller does not own the referenced job
            ValidationError: Decision is not "accepted" or "rejected"
            InvalidTransitionError: Application is not pending
        """
        job = self.get_job(application.job_id)
        guards.ensure_can_decide(employer, job, application)

        target = decision.value if isinstance(decision, ApplicationStatus) else decision
        if target not in APPLICATION_DECISIONS:
            raise ValidationError(f"Invalid decision: {decision}. Must be 'accepted' or 'rejected'")

        # The store re-checks pending at write time; a stale copy loses here.
        updated = self.storage.update_application_status(
            application.id,
            ApplicationStatus(target),
            expected_status=ApplicationStatus.PENDING,
        )
        if not updated:
            raise NotFoundError("Application", application.id)

        application.status = updated.status
        application.updated_at = updated.updated_at
        logger.info(
            f"Application decided | id={application.id} | job={job.id} | "
            f"status={application.status} | by={employer.id}"
        )
        return application

    def list_applications_for_freelancer(
        self, freelancer: Profile, limit: Optional[int] = None
    ) -> List[JobApplication]:
        """The freelancer's own applications, newest first."""
        guards.ensure_freelancer(freelancer, action="list their applications")
        return self.storage.list_applications(
            freelancer_id=freelancer.id, limit=self.config.clamp_limit(limit)
        )

    def list_applications_for_job(
        self, employer: Profile, job: Job, limit: Optional[int] = None
    ) -> List[JobApplication]:
        """Applications received for a job, newest first.

        Raises:
            AuthorizationError: Caller does not own the job
        """
        guards.ensure_job_owner(employer, job, action="view its applications")
        return self.storage.list_applications(job_id=job.id, limit=self.config.clamp_limit(limit))

    def list_application_listings_for_freelancer(
        self, freelancer: Profile, limit: Optional[int] = None
    ) -> List[ApplicationListing]:
        """Freelancer's applications joined with each job and its employer."""
        applications = self.list_applications_for_freelancer(freelancer, limit)
        return build_application_listings(applications, self.storage, self._require_profiles())

    def list_application_listings_for_job(
        self, employer: Profile, job: Job, limit: Optional[int] = None
    ) -> List[ApplicationListing]:
        """A job's applications joined with each freelancer's profile."""
        applications = self.list_applications_for_job(employer, job, limit)
        return build_application_listings(
            applications, self.storage, self._require_profiles(), jobs={job.id: job}
        )

    def _require_profiles(self) -> ProfileStorage:
        if self.profiles is None:
            raise RuntimeError("JobService was created without profile storage")
        return self.profiles
