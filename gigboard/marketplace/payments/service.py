"""
Payment ledger.

Payments are settlement records created administratively once an
engagement settles. End users can only read the rows they are a party to;
nothing here mutates an existing payment.
"""

import logging
import uuid
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from gigboard.marketplace.config import DEFAULT_CONFIG, MarketplaceConfig
from gigboard.marketplace.errors import ValidationError
from gigboard.marketplace.jobs.models import Job
from gigboard.marketplace.payments.models import Payment, PaymentStatus
from gigboard.marketplace.payments.storage import PaymentStorage
from gigboard.marketplace.profiles.models import Profile
from gigboard.marketplace.views import PaymentListing, build_payment_listings

logger = logging.getLogger(__name__)


def total_completed(payments: Iterable[Payment]) -> Decimal:
    """Exact sum of ``amount`` over completed payments. Zero when empty."""
    return sum(
        (p.amount for p in payments if p.status == PaymentStatus.COMPLETED.value),
        Decimal("0"),
    )


class PaymentLedger:
    """Read access to payments plus administrative recording."""

    def __init__(
        self,
        storage: PaymentStorage,
        config: Optional[MarketplaceConfig] = None,
        jobs: Any = None,
        profiles: Any = None,
    ):
        self.storage = storage
        self.config = config or DEFAULT_CONFIG
        self.jobs = jobs
        self.profiles = profiles

    def list_payments(self, profile: Profile, limit: Optional[int] = None) -> List[Payment]:
        """All payments where the profile is employer or freelancer, newest first.

        Unbounded unless ``limit`` is given, in which case it is clamped to
        the configured page size.
        """
        if limit is not None:
            limit = self.config.clamp_limit(limit)
        return self.storage.list_payments(party_id=profile.id, limit=limit)

    def list_payment_listings(
        self, profile: Profile, limit: Optional[int] = None
    ) -> List[PaymentListing]:
        """list_payments joined with each job and both parties."""
        if self.jobs is None or self.profiles is None:
            raise RuntimeError("PaymentLedger was created without job/profile storage")
        return build_payment_listings(self.list_payments(profile, limit), self.jobs, self.profiles)

    def total_completed(self, payments: Iterable[Payment]) -> Decimal:
        return total_completed(payments)

    def completed_total_for(self, profile: Profile) -> Decimal:
        """Total settled on the profile's side: spent for employers, earned for freelancers."""
        if profile.is_employer:
            rows = self.storage.list_payments(
                employer_id=profile.id, status=PaymentStatus.COMPLETED, limit=None
            )
        else:
            rows = self.storage.list_payments(
                freelancer_id=profile.id,
                status=PaymentStatus.COMPLETED,
                limit=None,
            )
        return total_completed(rows)

    def record_payment(
        self,
        job: Job,
        freelancer_id: str,
        amount: Any,
        status: Any = PaymentStatus.PENDING,
    ) -> Payment:
        """Create a settlement record for a job (administrative path).

        The employer is always the job's owner.

        Raises:
            ValidationError: amount <= 0, unknown status, or freelancer is the employer
        """
        if not freelancer_id:
            raise ValidationError("Freelancer is required")
        if freelancer_id == job.employer_id:
            raise ValidationError("Employer cannot pay themselves")

        payment = Payment(
            id=str(uuid.uuid4()),
            job_id=job.id,
            freelancer_id=freelancer_id,
            employer_id=job.employer_id,
            amount=amount,
            status=status.value if isinstance(status, PaymentStatus) else status,
        )
        stored = self.storage.save_payment(payment)
        logger.info(
            f"Payment recorded | id={stored.id} | job={job.id} | amount={stored.amount} | "
            f"status={stored.status}"
        )
        return stored
