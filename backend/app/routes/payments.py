"""Payment routes. Read-only: payments are recorded administratively."""

from fastapi import APIRouter, Query, Request

from ..auth import CurrentProfile
from ..database import MarketplaceDep
from ..logging_config import get_logger
from ..models import PaymentListResponse, PaymentResponse
from ..rate_limit import limiter

logger = get_logger("gigboard.api.payments")
router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse)
@limiter.limit("60/minute")
async def list_my_payments(
    request: Request,
    profile: CurrentProfile,
    market: MarketplaceDep,
    limit: int | None = Query(None, ge=1),
):
    """
    Payments where the caller is the employer or the freelancer, newest first.

    ``total_completed`` always covers every completed payment, even when
    ``limit`` trims the list.
    """
    logger.info(f"GET /payments | user={profile.id} | limit={limit}")
    listings = market.ledger.list_payment_listings(profile, limit)
    return PaymentListResponse(
        payments=[PaymentResponse.from_listing(listing) for listing in listings],
        total_completed=market.ledger.completed_total_for(profile),
    )
