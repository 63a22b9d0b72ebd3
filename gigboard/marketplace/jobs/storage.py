"""
Jobs storage layer.

Provides persistence for jobs and applications. ``InMemoryJobStorage`` backs
tests and local development; ``gigboard.marketplace.supabase_storage``
implements the same protocol over the Supabase data API.
"""

import itertools
import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from gigboard.marketplace.errors import DuplicateApplicationError, InvalidTransitionError
from gigboard.marketplace.jobs.models import ApplicationStatus, Job, JobApplication, JobStatus

logger = logging.getLogger(__name__)


class JobStorage(Protocol):
    """Protocol for job persistence backends."""

    # Jobs
    def save_job(self, job: Job) -> Job:
        """Insert a job row. Returns the stored job (timestamps filled in)."""
        ...

    def get_job(self, job_id: str) -> Optional[Job]:
        """Get a job by ID."""
        ...

    def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        employer_id: Optional[str] = None,
        skills: Optional[List[str]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Job]:
        """List jobs newest first with optional filters."""
        ...

    def count_jobs(self, employer_id: Optional[str] = None) -> int:
        """Count jobs, optionally for one employer."""
        ...

    def update_job_status(
        self,
        job_id: str,
        status: JobStatus,
        expected_status: Optional[JobStatus] = None,
    ) -> Optional[Job]:
        """Set a job's status. Returns the updated job, or None if absent.

        With ``expected_status`` the write only happens while the stored
        status still matches; otherwise InvalidTransitionError is raised.
        """
        ...

    # Applications
    def insert_application(self, application: JobApplication) -> JobApplication:
        """Insert an application.

        Must raise DuplicateApplicationError when an application for the same
        (job_id, freelancer_id) already exists. The check and the insert
        are a single atomic step.
        """
        ...

    def get_application(self, application_id: str) -> Optional[JobApplication]:
        """Get an application by ID."""
        ...

    def find_application(self, job_id: str, freelancer_id: str) -> Optional[JobApplication]:
        """Get the application a freelancer holds for a job, if any."""
        ...

    def list_applications(
        self,
        job_id: Optional[str] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
        limit: int = 100,
    ) -> List[JobApplication]:
        """List applications newest first with optional filters."""
        ...

    def count_applications(
        self,
        job_ids: Optional[Iterable[str]] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
    ) -> int:
        """Count applications across a set of jobs and/or for one freelancer."""
        ...

    def update_application_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        expected_status: Optional[ApplicationStatus] = None,
    ) -> Optional[JobApplication]:
        """Set an application's status. Returns the updated row, or None.

        Compare-and-set on ``expected_status`` like ``update_job_status``.
        """
        ...


def _value(status) -> Optional[str]:
    if status is None:
        return None
    return status.value if hasattr(status, "value") else status


class InMemoryJobStorage:
    """In-memory job storage for testing and local development.

    Application inserts hold a lock across the uniqueness check and the
    write, standing in for the unique index the real store carries.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._jobs: Dict[str, Job] = {}
        self._applications: Dict[str, JobApplication] = {}
        self._by_pair: Dict[Tuple[str, str], str] = {}  # (job_id, freelancer_id) -> app id
        self._order: Dict[str, int] = {}
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def _utc_now(self) -> datetime:
        """Get current UTC timestamp."""
        return datetime.now(timezone.utc)

    def _newest_first(self, rows: list) -> list:
        return sorted(
            rows,
            key=lambda r: (r.created_at or self._utc_now(), self._order.get(r.id, 0)),
            reverse=True,
        )

    # === Jobs ===

    def save_job(self, job: Job) -> Job:
        """Save a job listing."""
        now = self._utc_now()
        job.created_at = job.created_at or now
        job.updated_at = job.updated_at or now
        with self._lock:
            self._jobs[job.id] = job
            self._order[job.id] = next(self._seq)
        return job

    def get_job(self, job_id: str) -> Optional[Job]:
        """Get a job by ID."""
        return self._jobs.get(job_id)

    def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        employer_id: Optional[str] = None,
        skills: Optional[List[str]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Job]:
        """List jobs with optional filters."""
        jobs = list(self._jobs.values())

        status_val = _value(status)
        if status_val is not None:
            jobs = [j for j in jobs if j.status == status_val]
        if employer_id is not None:
            jobs = [j for j in jobs if j.employer_id == employer_id]
        if skills:
            jobs = [j for j in jobs if any(s in j.required_skills for s in skills)]

        return self._newest_first(jobs)[offset : offset + limit]

    def count_jobs(self, employer_id: Optional[str] = None) -> int:
        if employer_id is None:
            return len(self._jobs)
        return sum(1 for j in self._jobs.values() if j.employer_id == employer_id)

    def update_job_status(
        self,
        job_id: str,
        status: JobStatus,
        expected_status: Optional[JobStatus] = None,
    ) -> Optional[Job]:
        """Update a job's status."""
        with self._lock:
            job = self._jobs.get(job_id)
            if not job:
                return None
            if expected_status is not None and job.status != _value(expected_status):
                raise InvalidTransitionError(
                    f"Cannot move job from {job.status} to {_value(status)}"
                )
            job.status = _value(status)
            job.updated_at = self._utc_now()
            return job

    # === Applications ===

    def insert_application(self, application: JobApplication) -> JobApplication:
        """Save a job application, enforcing one per (job, freelancer)."""
        pair = (application.job_id, application.freelancer_id)
        with self._lock:
            if pair in self._by_pair:
                logger.debug(f"Duplicate application rejected | job={pair[0]} | freelancer={pair[1]}")
                raise DuplicateApplicationError(application.job_id, application.freelancer_id)
            now = self._utc_now()
            application.created_at = application.created_at or now
            application.updated_at = application.updated_at or now
            self._applications[application.id] = application
            self._by_pair[pair] = application.id
            self._order[application.id] = next(self._seq)
        return application

    def get_application(self, application_id: str) -> Optional[JobApplication]:
        """Get an application by ID."""
        return self._applications.get(application_id)

    def find_application(self, job_id: str, freelancer_id: str) -> Optional[JobApplication]:
        app_id = self._by_pair.get((job_id, freelancer_id))
        return self._applications.get(app_id) if app_id else None

    def list_applications(
        self,
        job_id: Optional[str] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
        limit: int = 100,
    ) -> List[JobApplication]:
        """List applications with optional filters."""
        apps = list(self._applications.values())

        if job_id is not None:
            apps = [a for a in apps if a.job_id == job_id]
        if freelancer_id is not None:
            apps = [a for a in apps if a.freelancer_id == freelancer_id]
        status_val = _value(status)
        if status_val is not None:
            apps = [a for a in apps if a.status == status_val]

        return self._newest_first(apps)[:limit]

    def count_applications(
        self,
        job_ids: Optional[Iterable[str]] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
    ) -> int:
        apps = list(self._applications.values())
        if job_ids is not None:
            wanted = set(job_ids)
            apps = [a for a in apps if a.job_id in wanted]
        if freelancer_id is not None:
            apps = [a for a in apps if a.freelancer_id == freelancer_id]
        status_val = _value(status)
        if status_val is not None:
            apps = [a for a in apps if a.status == status_val]
        return len(apps)

    def update_application_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        expected_status: Optional[ApplicationStatus] = None,
    ) -> Optional[JobApplication]:
        """Update application status."""
        with self._lock:
            app = self._applications.get(application_id)
            if not app:
                return None
            if expected_status is not None and app.status != _value(expected_status):
                raise InvalidTransitionError(f"Application is already {app.status}")
            app.status = _value(status)
            app.updated_at = self._utc_now()
            return app
