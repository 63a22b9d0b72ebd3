"""Payment data models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from gigboard.marketplace.errors import ValidationError
from gigboard.marketplace.utils import parse_datetime, require_positive


class PaymentStatus(str, Enum):
    """Settlement status of a payment record."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


VALID_PAYMENT_STATUSES = {s.value for s in PaymentStatus}


@dataclass(frozen=True)
class Payment:
    """Settlement record for an engagement. Immutable once created."""

    id: str
    job_id: str
    freelancer_id: str
    employer_id: str
    amount: Decimal
    status: str = PaymentStatus.PENDING.value
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "amount", require_positive(self.amount, "amount"))
        status = self.status.value if isinstance(self.status, PaymentStatus) else self.status
        if status not in VALID_PAYMENT_STATUSES:
            raise ValidationError(
                f"Invalid status: {status}. Must be one of {sorted(VALID_PAYMENT_STATUSES)}"
            )
        object.__setattr__(self, "status", status)

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED.value

    def to_dict(self) -> Dict[str, Any]:
        """Row representation for the ``payments`` table."""
        return {
            "id": self.id,
            "job_id": self.job_id,
            "freelancer_id": self.freelancer_id,
            "employer_id": self.employer_id,
            "amount": str(self.amount),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Payment":
        return cls(
            id=data["id"],
            job_id=data["job_id"],
            freelancer_id=data["freelancer_id"],
            employer_id=data["employer_id"],
            amount=data["amount"],
            status=data.get("status", PaymentStatus.PENDING.value),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )
