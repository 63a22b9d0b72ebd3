"""
Authorization guard for marketplace mutations.

Every mutating operation in the marketplace services calls one of these
predicates before touching storage. They take the acting Profile explicitly
so each rule can be tested without a request harness.
"""

from typing import Iterable

from gigboard.marketplace.errors import (
    AuthorizationError,
    InvalidTransitionError,
    ValidationError,
)
from gigboard.marketplace.jobs.models import ApplicationStatus, Job, JobApplication
from gigboard.marketplace.profiles.models import MUTABLE_PROFILE_FIELDS, Profile


def ensure_can_post_job(actor: Profile) -> None:
    """Only employers may create job postings."""
    if not actor.is_employer:
        raise ValidationError("Only employers can post jobs")


def ensure_job_owner(actor: Profile, job: Job, action: str = "modify this job") -> None:
    """The acting profile must be the employer that owns the job."""
    if actor.id != job.employer_id:
        raise AuthorizationError(f"Only the job's employer can {action}")


def ensure_can_apply(actor: Profile) -> None:
    """Only freelancers may submit applications.

    Uniqueness per (job, freelancer) is not checked here; the store's unique
    constraint is the only race-free place to enforce it.
    """
    if not actor.is_freelancer:
        raise AuthorizationError("Only freelancers can apply to jobs")


def ensure_can_decide(actor: Profile, job: Job, application: JobApplication) -> None:
    """Employer of the referenced job, deciding a still-pending application."""
    if application.job_id != job.id:
        raise ValidationError("Application does not belong to this job")
    ensure_job_owner(actor, job, action="decide applications")
    if application.status != ApplicationStatus.PENDING.value:
        raise InvalidTransitionError(f"Application is already {application.status}")


def ensure_profile_owner(actor: Profile, profile_id: str) -> None:
    """A profile can only be changed by its owner."""
    if actor.id != profile_id:
        raise AuthorizationError("You can only update your own profile")


def ensure_mutable_profile_fields(changes: Iterable[str]) -> None:
    """Reject changes to role, id, email or unknown columns."""
    blocked = sorted(set(changes) - MUTABLE_PROFILE_FIELDS)
    if blocked:
        raise ValidationError(f"Profile fields cannot be changed: {', '.join(blocked)}")


def ensure_freelancer(actor: Profile, action: str = "do this") -> None:
    """Freelancer-only operations, such as listing one's own applications."""
    if not actor.is_freelancer:
        raise AuthorizationError(f"Only freelancers can {action}")
