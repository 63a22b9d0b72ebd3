"""
Supabase-backed marketplace storage.

Implements ``ProfileStorage``, ``JobStorage`` and ``PaymentStorage`` over a
supabase-py ``Client``. The one-application-per-job rule relies on the
unique index on ``applications (job_id, freelancer_id)``; a unique
violation (Postgres ``23505``) comes back as ``DuplicateApplicationError``.
Any other data API failure is logged and raised as ``StoreUnavailableError``.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from gigboard.marketplace.errors import (
    DuplicateApplicationError,
    InvalidTransitionError,
    StoreUnavailableError,
)
from gigboard.marketplace.jobs.models import ApplicationStatus, Job, JobApplication, JobStatus
from gigboard.marketplace.payments.models import Payment, PaymentStatus
from gigboard.marketplace.profiles.models import Profile

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
JOBS_TABLE = "jobs"
APPLICATIONS_TABLE = "applications"
PAYMENTS_TABLE = "payments"

UNIQUE_VIOLATION = "23505"


def _value(status) -> Optional[str]:
    if status is None:
        return None
    return status.value if hasattr(status, "value") else status


def _row(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset columns so database defaults apply."""
    return {k: v for k, v in data.items() if v is not None}


class SupabaseMarketplaceStorage:
    """All marketplace tables behind one Supabase client."""

    def __init__(self, client: Client):
        self.client = client

    def _execute(self, query, operation: str):
        try:
            return query.execute()
        except APIError as e:
            logger.error(f"Data API error | op={operation} | code={e.code} | message={e.message}")
            raise StoreUnavailableError(f"Store request failed during {operation}") from e
        except httpx.HTTPError as e:
            logger.error(f"Data API unreachable | op={operation} | error={e}")
            raise StoreUnavailableError(f"Store unreachable during {operation}") from e

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    # =========================================================================
    # Profiles
    # =========================================================================

    def save_profile(self, profile: Profile) -> Profile:
        result = self._execute(
            self.client.table(PROFILES_TABLE).insert(_row(profile.to_dict())), "save_profile"
        )
        return Profile.from_dict(result.data[0]) if result.data else profile

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        result = self._execute(
            self.client.table(PROFILES_TABLE).select("*").eq("id", profile_id), "get_profile"
        )
        return Profile.from_dict(result.data[0]) if result.data else None

    def get_profiles(self, profile_ids: Iterable[str]) -> Dict[str, Profile]:
        ids = sorted(set(profile_ids))
        if not ids:
            return {}
        result = self._execute(
            self.client.table(PROFILES_TABLE).select("*").in_("id", ids), "get_profiles"
        )
        return {row["id"]: Profile.from_dict(row) for row in result.data or []}

    def update_profile(self, profile_id: str, changes: Dict[str, Any]) -> Optional[Profile]:
        update = {**changes, "updated_at": self._now()}
        result = self._execute(
            self.client.table(PROFILES_TABLE).update(update).eq("id", profile_id), "update_profile"
        )
        return Profile.from_dict(result.data[0]) if result.data else None

    # =========================================================================
    # Jobs
    # =========================================================================

    def save_job(self, job: Job) -> Job:
        result = self._execute(self.client.table(JOBS_TABLE).insert(_row(job.to_dict())), "save_job")
        return Job.from_dict(result.data[0]) if result.data else job

    def get_job(self, job_id: str) -> Optional[Job]:
        result = self._execute(self.client.table(JOBS_TABLE).select("*").eq("id", job_id), "get_job")
        return Job.from_dict(result.data[0]) if result.data else None

    def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        employer_id: Optional[str] = None,
        skills: Optional[List[str]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Job]:
        query = self.client.table(JOBS_TABLE).select("*")
        status_val = _value(status)
        if status_val:
            query = query.eq("status", status_val)
        if employer_id:
            query = query.eq("employer_id", employer_id)
        if skills:
            query = query.overlaps("required_skills", skills)
        query = query.order("created_at", desc=True).range(offset, offset + limit - 1)
        result = self._execute(query, "list_jobs")
        return [Job.from_dict(row) for row in result.data or []]

    def count_jobs(self, employer_id: Optional[str] = None) -> int:
        query = self.client.table(JOBS_TABLE).select("id", count="exact")
        if employer_id:
            query = query.eq("employer_id", employer_id)
        result = self._execute(query.limit(1), "count_jobs")
        return result.count or 0

    def update_job_status(
        self,
        job_id: str,
        status: JobStatus,
        expected_status: Optional[JobStatus] = None,
    ) -> Optional[Job]:
        update = {"status": _value(status), "updated_at": self._now()}
        query = self.client.table(JOBS_TABLE).update(update).eq("id", job_id)
        if expected_status is not None:
            query = query.eq("status", _value(expected_status))
        result = self._execute(query, "update_job_status")
        if result.data:
            return Job.from_dict(result.data[0])
        if expected_status is None:
            return None
        current = self.get_job(job_id)
        if current is None:
            return None
        logger.info(
            f"Job status changed concurrently | id={job_id} | expected={_value(expected_status)} | "
            f"actual={current.status}"
        )
        raise InvalidTransitionError(f"Cannot move job from {current.status} to {_value(status)}")

    # =========================================================================
    # Applications
    # =========================================================================

    def insert_application(self, application: JobApplication) -> JobApplication:
        query = self.client.table(APPLICATIONS_TABLE).insert(_row(application.to_dict()))
        try:
            result = query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.debug(
                    f"Duplicate application rejected | job={application.job_id} | "
                    f"freelancer={application.freelancer_id}"
                )
                raise DuplicateApplicationError(application.job_id, application.freelancer_id) from e
            logger.error(f"Data API error | op=insert_application | code={e.code} | message={e.message}")
            raise StoreUnavailableError("Store request failed during insert_application") from e
        except httpx.HTTPError as e:
            logger.error(f"Data API unreachable | op=insert_application | error={e}")
            raise StoreUnavailableError("Store unreachable during insert_application") from e
        return JobApplication.from_dict(result.data[0]) if result.data else application

    def get_application(self, application_id: str) -> Optional[JobApplication]:
        result = self._execute(
            self.client.table(APPLICATIONS_TABLE).select("*").eq("id", application_id),
            "get_application",
        )
        return JobApplication.from_dict(result.data[0]) if result.data else None

    def find_application(self, job_id: str, freelancer_id: str) -> Optional[JobApplication]:
        result = self._execute(
            self.client.table(APPLICATIONS_TABLE)
            .select("*")
            .eq("job_id", job_id)
            .eq("freelancer_id", freelancer_id)
            .limit(1),
            "find_application",
        )
        return JobApplication.from_dict(result.data[0]) if result.data else None

    def list_applications(
        self,
        job_id: Optional[str] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
        limit: int = 100,
    ) -> List[JobApplication]:
        query = self.client.table(APPLICATIONS_TABLE).select("*")
        if job_id:
            query = query.eq("job_id", job_id)
        if freelancer_id:
            query = query.eq("freelancer_id", freelancer_id)
        status_val = _value(status)
        if status_val:
            query = query.eq("status", status_val)
        result = self._execute(
            query.order("created_at", desc=True).limit(limit), "list_applications"
        )
        return [JobApplication.from_dict(row) for row in result.data or []]

    def count_applications(
        self,
        job_ids: Optional[Iterable[str]] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
    ) -> int:
        query = self.client.table(APPLICATIONS_TABLE).select("id", count="exact")
        if job_ids is not None:
            ids = list(job_ids)
            if not ids:
                return 0
            query = query.in_("job_id", ids)
        if freelancer_id:
            query = query.eq("freelancer_id", freelancer_id)
        status_val = _value(status)
        if status_val:
            query = query.eq("status", status_val)
        result = self._execute(query.limit(1), "count_applications")
        return result.count or 0

    def update_application_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        expected_status: Optional[ApplicationStatus] = None,
    ) -> Optional[JobApplication]:
        update = {"status": _value(status), "updated_at": self._now()}
        query = self.client.table(APPLICATIONS_TABLE).update(update).eq("id", application_id)
        if expected_status is not None:
            query = query.eq("status", _value(expected_status))
        result = self._execute(query, "update_application_status")
        if result.data:
            return JobApplication.from_dict(result.data[0])
        if expected_status is None:
            return None
        current = self.get_application(application_id)
        if current is None:
            return None
        logger.info(
            f"Application decided concurrently | id={application_id} | "
            f"expected={_value(expected_status)} | actual={current.status}"
        )
        raise InvalidTransitionError(f"Application is already {current.status}")

    # =========================================================================
    # Payments
    # =========================================================================

    def save_payment(self, payment: Payment) -> Payment:
        result = self._execute(
            self.client.table(PAYMENTS_TABLE).insert(_row(payment.to_dict())), "save_payment"
        )
        return Payment.from_dict(result.data[0]) if result.data else payment

    def get_payment(self, payment_id: str) -> Optional[Payment]:
        result = self._execute(
            self.client.table(PAYMENTS_TABLE).select("*").eq("id", payment_id), "get_payment"
        )
        return Payment.from_dict(result.data[0]) if result.data else None

    def list_payments(
        self,
        party_id: Optional[str] = None,
        employer_id: Optional[str] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
        limit: Optional[int] = 100,
    ) -> List[Payment]:
        query = self.client.table(PAYMENTS_TABLE).select("*")
        if party_id:
            query = query.or_(f"employer_id.eq.{party_id},freelancer_id.eq.{party_id}")
        if employer_id:
            query = query.eq("employer_id", employer_id)
        if freelancer_id:
            query = query.eq("freelancer_id", freelancer_id)
        status_val = _value(status)
        if status_val:
            query = query.eq("status", status_val)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        result = self._execute(query, "list_payments")
        return [Payment.from_dict(row) for row in result.data or []]
