"""Profile data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from gigboard.marketplace.errors import ValidationError
from gigboard.marketplace.utils import normalize_skills, parse_datetime


class ProfileRole(str, Enum):
    """Marketplace role, fixed when the profile is created."""

    FREELANCER = "freelancer"
    EMPLOYER = "employer"


VALID_ROLES = {r.value for r in ProfileRole}

# Fields an owner may change after sign-up.
MUTABLE_PROFILE_FIELDS = frozenset({"full_name", "bio", "skills", "avatar_url"})


@dataclass
class Profile:
    """An authenticated marketplace participant.

    ``id`` is the auth provider's user id. ``skills`` only carries meaning for
    freelancers but is stored for every role.
    """

    id: str
    email: str
    role: str
    full_name: str = ""
    bio: str = ""
    skills: List[str] = field(default_factory=list)
    avatar_url: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.role, ProfileRole):
            self.role = self.role.value
        if self.role not in VALID_ROLES:
            raise ValidationError(f"Invalid role: {self.role}. Must be one of {sorted(VALID_ROLES)}")
        if not self.id:
            raise ValidationError("Profile id is required")
        self.skills = normalize_skills(self.skills)

    @property
    def is_freelancer(self) -> bool:
        return self.role == ProfileRole.FREELANCER.value

    @property
    def is_employer(self) -> bool:
        return self.role == ProfileRole.EMPLOYER.value

    def to_dict(self) -> Dict[str, Any]:
        """Row representation for the ``profiles`` table."""
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "bio": self.bio,
            "skills": list(self.skills),
            "avatar_url": self.avatar_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            id=data["id"],
            email=data.get("email") or "",
            role=data["role"],
            full_name=data.get("full_name") or "",
            bio=data.get("bio") or "",
            skills=data.get("skills") or [],
            avatar_url=data.get("avatar_url") or "",
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )
