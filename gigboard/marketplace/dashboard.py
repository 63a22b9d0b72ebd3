"""Per-role summary statistics for the dashboard screen."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from gigboard.marketplace.jobs.models import ApplicationStatus
from gigboard.marketplace.jobs.storage import JobStorage
from gigboard.marketplace.payments.service import PaymentLedger
from gigboard.marketplace.profiles.models import Profile

logger = logging.getLogger(__name__)


@dataclass
class DashboardStats:
    """Headline numbers for one profile.

    For employers ``total_payments`` is what they spent; for freelancers it
    is what they earned. Only completed payments count.
    """

    total_jobs: int = 0
    total_applications: int = 0
    accepted_applications: int = 0
    total_payments: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_jobs": self.total_jobs,
            "total_applications": self.total_applications,
            "accepted_applications": self.accepted_applications,
            "total_payments": str(self.total_payments),
        }


def compute_dashboard(profile: Profile, jobs: JobStorage, ledger: PaymentLedger) -> DashboardStats:
    """Build the dashboard numbers for ``profile``."""
    if profile.is_employer:
        total_jobs = jobs.count_jobs(employer_id=profile.id)
        job_ids = [j.id for j in jobs.list_jobs(employer_id=profile.id, limit=total_jobs)] if total_jobs else []
        stats = DashboardStats(
            total_jobs=total_jobs,
            total_applications=jobs.count_applications(job_ids=job_ids) if job_ids else 0,
            accepted_applications=0,
            total_payments=ledger.completed_total_for(profile),
        )
    else:
        stats = DashboardStats(
            total_jobs=0,
            total_applications=jobs.count_applications(freelancer_id=profile.id),
            accepted_applications=jobs.count_applications(
                freelancer_id=profile.id, status=ApplicationStatus.ACCEPTED
            ),
            total_payments=ledger.completed_total_for(profile),
        )

    logger.debug(
        f"Dashboard computed | profile={profile.id} | role={profile.role} | "
        f"jobs={stats.total_jobs} | applications={stats.total_applications}"
    )
    return stats
