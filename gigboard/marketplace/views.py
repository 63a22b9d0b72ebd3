"""
Joined read models.

The stored rows only hold foreign keys (``employer_id``, ``job_id``,
``freelancer_id``). Screens want the referenced records alongside, so these
helpers assemble them on demand with one batched profile lookup per list.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from gigboard.marketplace.jobs.models import Job, JobApplication
from gigboard.marketplace.profiles.models import Profile

if TYPE_CHECKING:
    from gigboard.marketplace.payments.models import Payment


@dataclass
class JobListing:
    """A job with its employer's profile."""

    job: Job
    employer: Optional[Profile] = None


@dataclass
class ApplicationListing:
    """An application with its job, the job's employer and the applicant."""

    application: JobApplication
    job: Optional[Job] = None
    employer: Optional[Profile] = None
    freelancer: Optional[Profile] = None


@dataclass
class PaymentListing:
    """A payment with its job and both parties."""

    payment: "Payment"
    job: Optional[Job] = None
    employer: Optional[Profile] = None
    freelancer: Optional[Profile] = None


def build_job_listings(jobs: List[Job], profiles: Any) -> List[JobListing]:
    """Join each job with its employer profile."""
    employers = profiles.get_profiles({j.employer_id for j in jobs})
    return [JobListing(job=j, employer=employers.get(j.employer_id)) for j in jobs]


def _load_jobs(job_ids, job_storage: Any, known: Optional[Dict[str, Job]] = None) -> Dict[str, Job]:
    jobs = dict(known or {})
    for job_id in job_ids:
        if job_id not in jobs:
            job = job_storage.get_job(job_id)
            if job:
                jobs[job_id] = job
    return jobs


def build_application_listings(
    applications: List[JobApplication],
    job_storage: Any,
    profiles: Any,
    jobs: Optional[Dict[str, Job]] = None,
) -> List[ApplicationListing]:
    """Join each application with its job, employer and freelancer."""
    job_map = _load_jobs({a.job_id for a in applications}, job_storage, jobs)
    people = profiles.get_profiles(
        {a.freelancer_id for a in applications} | {j.employer_id for j in job_map.values()}
    )
    listings = []
    for app in applications:
        job = job_map.get(app.job_id)
        listings.append(
            ApplicationListing(
                application=app,
                job=job,
                employer=people.get(job.employer_id) if job else None,
                freelancer=people.get(app.freelancer_id),
            )
        )
    return listings


def build_payment_listings(
    payments: List["Payment"], job_storage: Any, profiles: Any
) -> List[PaymentListing]:
    """Join each payment with its job and both parties."""
    job_map = _load_jobs({p.job_id for p in payments}, job_storage)
    people = profiles.get_profiles(
        {p.employer_id for p in payments} | {p.freelancer_id for p in payments}
    )
    return [
        PaymentListing(
            payment=p,
            job=job_map.get(p.job_id),
            employer=people.get(p.employer_id),
            freelancer=people.get(p.freelancer_id),
        )
        for p in payments
    ]
