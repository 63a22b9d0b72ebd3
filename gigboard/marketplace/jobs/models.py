"""Job and application data models with their lifecycle rules."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from gigboard.marketplace.errors import ValidationError
from gigboard.marketplace.utils import (
    normalize_skills,
    parse_datetime,
    require_positive,
    require_text,
)

MAX_TITLE_LENGTH = 200


class JobStatus(str, Enum):
    """Job lifecycle status."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ApplicationStatus(str, Enum):
    """Application lifecycle status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Statuses missing from the map (completed, cancelled) are terminal.
VALID_JOB_TRANSITIONS: Dict[str, set] = {
    JobStatus.OPEN.value: {JobStatus.IN_PROGRESS.value, JobStatus.CANCELLED.value},
    JobStatus.IN_PROGRESS.value: {JobStatus.COMPLETED.value, JobStatus.CANCELLED.value},
}

VALID_APPLICATION_TRANSITIONS: Dict[str, set] = {
    ApplicationStatus.PENDING.value: {
        ApplicationStatus.ACCEPTED.value,
        ApplicationStatus.REJECTED.value,
    },
}

# Decisions an employer can record on a pending application.
APPLICATION_DECISIONS = frozenset(VALID_APPLICATION_TRANSITIONS[ApplicationStatus.PENDING.value])


def _status_value(status: Any, enum_cls: type) -> str:
    if isinstance(status, enum_cls):
        return status.value
    valid = {s.value for s in enum_cls}
    if status not in valid:
        raise ValidationError(f"Invalid status: {status}. Must be one of {sorted(valid)}")
    return status


@dataclass
class Job:
    """A work posting owned by an employer.

    ``budget`` is always a ``Decimal``; ``required_skills`` is normalized
    (stripped, de-duplicated) and must not be empty.
    """

    id: str
    employer_id: str
    title: str
    description: str
    budget: Decimal
    required_skills: List[str] = field(default_factory=list)
    status: str = JobStatus.OPEN.value
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    max_title_length: int = field(default=MAX_TITLE_LENGTH, repr=False, compare=False)

    def __post_init__(self):
        require_text(self.title, "title", max_length=self.max_title_length)
        require_text(self.description, "description")
        self.budget = require_positive(self.budget, "budget")
        self.required_skills = normalize_skills(self.required_skills)
        if not self.required_skills:
            raise ValidationError("At least one required skill is needed")
        self.status = _status_value(self.status, JobStatus)

    @property
    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN.value

    @property
    def is_terminal(self) -> bool:
        return self.status not in VALID_JOB_TRANSITIONS

    def can_transition_to(self, new_status: Any) -> bool:
        """Check the job lifecycle table for ``status -> new_status``."""
        target = new_status.value if isinstance(new_status, JobStatus) else new_status
        return target in VALID_JOB_TRANSITIONS.get(self.status, set())

    def to_dict(self) -> Dict[str, Any]:
        """Row representation for the ``jobs`` table."""
        return {
            "id": self.id,
            "employer_id": self.employer_id,
            "title": self.title,
            "description": self.description,
            "budget": str(self.budget),
            "required_skills": list(self.required_skills),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        return cls(
            id=data["id"],
            employer_id=data["employer_id"],
            title=data["title"],
            description=data["description"],
            budget=data["budget"],
            required_skills=data.get("required_skills") or [],
            status=data.get("status", JobStatus.OPEN.value),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )


@dataclass
class JobApplication:
    """A freelancer's bid on a job."""

    id: str
    job_id: str
    freelancer_id: str
    cover_letter: str
    proposed_rate: Decimal
    status: str = ApplicationStatus.PENDING.value
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        require_text(self.cover_letter, "cover_letter")
        self.proposed_rate = require_positive(self.proposed_rate, "proposed_rate")
        self.status = _status_value(self.status, ApplicationStatus)

    @property
    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING.value

    @property
    def is_terminal(self) -> bool:
        return self.status not in VALID_APPLICATION_TRANSITIONS

    def can_transition_to(self, new_status: Any) -> bool:
        target = new_status.value if isinstance(new_status, ApplicationStatus) else new_status
        return target in VALID_APPLICATION_TRANSITIONS.get(self.status, set())

    def to_dict(self) -> Dict[str, Any]:
        """Row representation for the ``applications`` table."""
        return {
            "id": self.id,
            "job_id": self.job_id,
            "freelancer_id": self.freelancer_id,
            "cover_letter": self.cover_letter,
            "proposed_rate": str(self.proposed_rate),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobApplication":
        return cls(
            id=data["id"],
            job_id=data["job_id"],
            freelancer_id=data["freelancer_id"],
            cover_letter=data["cover_letter"],
            proposed_rate=data["proposed_rate"],
            status=data.get("status", ApplicationStatus.PENDING.value),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )
