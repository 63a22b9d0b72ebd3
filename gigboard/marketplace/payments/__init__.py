"""Payment records and the read-only ledger."""

from gigboard.marketplace.payments.models import Payment, PaymentStatus
from gigboard.marketplace.payments.service import PaymentLedger, total_completed
from gigboard.marketplace.payments.storage import InMemoryPaymentStorage, PaymentStorage

__all__ = [
    "Payment",
    "PaymentStatus",
    "PaymentLedger",
    "total_completed",
    "PaymentStorage",
    "InMemoryPaymentStorage",
]
