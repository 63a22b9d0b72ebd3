"""Jobs and applications.

Models:
- Job: A work listing posted by an employer
- JobApplication: A freelancer's bid on a job
- JobStatus: Job lifecycle status
- ApplicationStatus: Application lifecycle status

Service:
- JobService: Job operations (post, transition, apply, decide, list)
"""

from gigboard.marketplace.jobs.models import (
    VALID_APPLICATION_TRANSITIONS,
    VALID_JOB_TRANSITIONS,
    ApplicationStatus,
    Job,
    JobApplication,
    JobStatus,
)
from gigboard.marketplace.jobs.service import JobSearchFilters, JobService
from gigboard.marketplace.jobs.storage import InMemoryJobStorage, JobStorage

__all__ = [
    # Models
    "Job",
    "JobApplication",
    "JobStatus",
    "ApplicationStatus",
    "VALID_JOB_TRANSITIONS",
    "VALID_APPLICATION_TRANSITIONS",
    # Service
    "JobService",
    "JobSearchFilters",
    # Storage
    "JobStorage",
    "InMemoryJobStorage",
]
