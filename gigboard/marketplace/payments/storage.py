"""Payment storage layer. Append-only: there is no update or delete."""

import itertools
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

from gigboard.marketplace.payments.models import Payment, PaymentStatus


class PaymentStorage(Protocol):
    """Protocol for payment persistence backends."""

    def save_payment(self, payment: Payment) -> Payment:
        """Insert a payment row. Returns the stored payment."""
        ...

    def get_payment(self, payment_id: str) -> Optional[Payment]:
        """Get a payment by ID."""
        ...

    def list_payments(
        self,
        party_id: Optional[str] = None,
        employer_id: Optional[str] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
        limit: Optional[int] = 100,
    ) -> List[Payment]:
        """List payments newest first.

        ``party_id`` matches rows where the profile is either the employer
        or the freelancer. ``limit=None`` returns every match.
        """
        ...


class InMemoryPaymentStorage:
    """In-memory payment storage for testing and local development."""

    def __init__(self):
        self._payments: Dict[str, Payment] = {}
        self._order: Dict[str, int] = {}
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def save_payment(self, payment: Payment) -> Payment:
        now = datetime.now(timezone.utc)
        stored = replace(
            payment,
            created_at=payment.created_at or now,
            updated_at=payment.updated_at or now,
        )
        with self._lock:
            self._payments[stored.id] = stored
            self._order[stored.id] = next(self._seq)
        return stored

    def get_payment(self, payment_id: str) -> Optional[Payment]:
        return self._payments.get(payment_id)

    def list_payments(
        self,
        party_id: Optional[str] = None,
        employer_id: Optional[str] = None,
        freelancer_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
        limit: Optional[int] = 100,
    ) -> List[Payment]:
        payments = list(self._payments.values())

        if party_id is not None:
            payments = [p for p in payments if party_id in (p.employer_id, p.freelancer_id)]
        if employer_id is not None:
            payments = [p for p in payments if p.employer_id == employer_id]
        if freelancer_id is not None:
            payments = [p for p in payments if p.freelancer_id == freelancer_id]
        if status is not None:
            status_val = status.value if isinstance(status, PaymentStatus) else status
            payments = [p for p in payments if p.status == status_val]

        payments.sort(key=lambda p: (p.created_at, self._order[p.id]), reverse=True)
        return payments[:limit]
