"""Profile storage layer."""

import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Protocol

from gigboard.marketplace.profiles.models import Profile


class ProfileStorage(Protocol):
    """Protocol for profile persistence backends."""

    def save_profile(self, profile: Profile) -> Profile:
        """Insert a profile row. Returns the stored profile."""
        ...

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Get a profile by ID."""
        ...

    def get_profiles(self, profile_ids: Iterable[str]) -> Dict[str, Profile]:
        """Fetch several profiles at once, keyed by ID. Missing IDs are omitted."""
        ...

    def update_profile(self, profile_id: str, changes: Dict[str, Any]) -> Optional[Profile]:
        """Apply column changes. Returns the updated profile, or None if absent."""
        ...


class InMemoryProfileStorage:
    """In-memory profile storage for testing and local development."""

    def __init__(self):
        self._profiles: Dict[str, Profile] = {}
        self._lock = threading.Lock()

    def save_profile(self, profile: Profile) -> Profile:
        now = datetime.now(timezone.utc)
        profile.created_at = profile.created_at or now
        profile.updated_at = profile.updated_at or now
        with self._lock:
            self._profiles[profile.id] = profile
        return profile

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        return self._profiles.get(profile_id)

    def get_profiles(self, profile_ids: Iterable[str]) -> Dict[str, Profile]:
        return {pid: self._profiles[pid] for pid in set(profile_ids) if pid in self._profiles}

    def update_profile(self, profile_id: str, changes: Dict[str, Any]) -> Optional[Profile]:
        with self._lock:
            profile = self._profiles.get(profile_id)
            if not profile:
                return None
            for key, value in changes.items():
                setattr(profile, key, value)
            profile.updated_at = datetime.now(timezone.utc)
        return profile
