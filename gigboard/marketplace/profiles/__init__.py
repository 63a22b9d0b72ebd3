"""User profiles: identity, role and public details."""

from gigboard.marketplace.profiles.models import (
    MUTABLE_PROFILE_FIELDS,
    Profile,
    ProfileRole,
)
from gigboard.marketplace.profiles.service import ProfileService
from gigboard.marketplace.profiles.storage import InMemoryProfileStorage, ProfileStorage

__all__ = [
    "Profile",
    "ProfileRole",
    "MUTABLE_PROFILE_FIELDS",
    "ProfileService",
    "ProfileStorage",
    "InMemoryProfileStorage",
]
