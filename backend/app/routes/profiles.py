"""Profile routes."""

from fastapi import APIRouter, Request

from ..auth import CurrentProfile
from ..database import MarketplaceDep
from ..logging_config import get_logger
from ..models import ProfileResponse, ProfileUpdate
from ..rate_limit import limiter

logger = get_logger("gigboard.api.profiles")
router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
@limiter.limit("60/minute")
async def get_my_profile(request: Request, profile: CurrentProfile):
    """The caller's own profile."""
    return ProfileResponse.from_profile(profile)


@router.patch("/me", response_model=ProfileResponse)
@limiter.limit("20/minute")
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """
    Update name, bio, skills or avatar.

    Role, id and email cannot be changed.
    """
    changes = body.model_dump(exclude_unset=True)
    logger.info(f"PATCH /profiles/me | user={profile.id} | fields={sorted(changes)}")
    updated = market.profiles.update_profile(profile, profile.id, **changes)
    return ProfileResponse.from_profile(updated)


@router.get("/{profile_id}", response_model=ProfileResponse)
@limiter.limit("60/minute")
async def get_profile(
    request: Request,
    profile_id: str,
    profile: CurrentProfile,
    market: MarketplaceDep,
):
    """Any profile, for showing employers and applicants."""
    return ProfileResponse.from_profile(market.profiles.get_profile(profile_id))
