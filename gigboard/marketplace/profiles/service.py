"""
Profile service.

Profiles are created once, at sign-up, with a role that never changes.
Afterwards only the owner may edit the descriptive fields.
"""

import logging
from typing import Any, Optional

from gigboard.marketplace import guards
from gigboard.marketplace.config import DEFAULT_CONFIG, MarketplaceConfig
from gigboard.marketplace.errors import NotFoundError, ValidationError
from gigboard.marketplace.profiles.models import Profile, ProfileRole
from gigboard.marketplace.profiles.storage import ProfileStorage
from gigboard.marketplace.utils import normalize_skills

logger = logging.getLogger(__name__)


class ProfileService:
    """Create, read and update marketplace profiles."""

    def __init__(self, storage: ProfileStorage, config: Optional[MarketplaceConfig] = None):
        self.storage = storage
        self.config = config or DEFAULT_CONFIG

    def create_profile(
        self,
        user_id: str,
        email: str,
        full_name: str,
        role: Any,
    ) -> Profile:
        """Create the profile for a newly signed-up user.

        Args:
            user_id: Identity issued by the auth provider
            email: Account email
            full_name: Display name
            role: "freelancer" or "employer" (fixed from here on)

        Returns:
            The stored Profile

        Raises:
            ValidationError: Unknown role or missing name
        """
        if not full_name or not full_name.strip():
            raise ValidationError("Full name is required")
        profile = Profile(
            id=user_id,
            email=email,
            role=role.value if isinstance(role, ProfileRole) else role,
            full_name=full_name.strip(),
        )
        stored = self.storage.save_profile(profile)
        logger.info(f"Profile created | id={stored.id} | role={stored.role}")
        return stored

    def get_profile(self, profile_id: str) -> Profile:
        """Get a profile by ID.

        Raises:
            NotFoundError: If no such profile exists
        """
        profile = self.storage.get_profile(profile_id)
        if not profile:
            raise NotFoundError("Profile", profile_id)
        return profile

    def update_profile(self, actor: Profile, profile_id: str, **changes: Any) -> Profile:
        """Update the owner's own descriptive fields.

        Raises:
            AuthorizationError: Actor is not the profile owner
            ValidationError: Attempt to change role/id/email or an unknown field
            NotFoundError: Profile does not exist
        """
        guards.ensure_profile_owner(actor, profile_id)
        guards.ensure_mutable_profile_fields(changes)

        if "skills" in changes:
            skills = normalize_skills(changes["skills"])
            if len(skills) > self.config.max_skills:
                raise ValidationError(f"Too many skills (max {self.config.max_skills})")
            changes["skills"] = skills
        if "full_name" in changes:
            name = changes["full_name"]
            if name is None or not str(name).strip():
                raise ValidationError("Full name is required")
            changes["full_name"] = str(name).strip()
        for key in ("bio", "avatar_url"):
            if key in changes and changes[key] is None:
                changes[key] = ""

        if not changes:
            return self.get_profile(profile_id)

        updated = self.storage.update_profile(profile_id, changes)
        if not updated:
            raise NotFoundError("Profile", profile_id)

        logger.info(f"Profile updated | id={profile_id} | fields={sorted(changes)}")
        return updated
