"""Pydantic models for API requests and responses.

Request models only check shapes and types. Domain rules (positive
amounts, required skills, role checks) are enforced by the marketplace
core and come back as 400/403/409 responses.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from gigboard.marketplace.jobs.models import Job, JobApplication
from gigboard.marketplace.payments.models import Payment
from gigboard.marketplace.profiles.models import Profile
from gigboard.marketplace.views import ApplicationListing, JobListing, PaymentListing

Role = Literal["freelancer", "employer"]
JobStatus = Literal["open", "in_progress", "completed", "cancelled"]
ApplicationStatus = Literal["pending", "accepted", "rejected"]
PaymentStatus = Literal["pending", "completed", "cancelled"]


# =============================================================================
# Auth Models
# =============================================================================

class SignUpRequest(BaseModel):
    """Request to create an account and its profile."""
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    role: Role


class SignInRequest(BaseModel):
    """Email and password sign-in."""
    email: str
    password: str


class SessionResponse(BaseModel):
    """Access token issued by the auth provider."""
    user_id: str
    access_token: str | None = None  # None until the email is confirmed
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None


# =============================================================================
# Profile Models
# =============================================================================

class ProfileUpdate(BaseModel):
    """Partial profile update.

    Unknown fields are passed through so the core can reject attempts to
    change role, id or email with a clear message.
    """
    model_config = ConfigDict(extra="allow")

    full_name: str | None = None
    bio: str | None = None
    skills: list[str] | None = None
    avatar_url: str | None = None


class ProfileResponse(BaseModel):
    """Public profile."""
    id: str
    email: str
    full_name: str
    role: Role
    bio: str
    skills: list[str]
    avatar_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            full_name=profile.full_name,
            role=profile.role,
            bio=profile.bio,
            skills=list(profile.skills),
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


def _profile(profile: Profile | None) -> ProfileResponse | None:
    return ProfileResponse.from_profile(profile) if profile else None


# =============================================================================
# Job Models
# =============================================================================

class JobCreate(BaseModel):
    """Request to post a job."""
    title: str
    description: str
    budget: Decimal
    required_skills: list[str] = Field(default_factory=list)


class JobStatusUpdate(BaseModel):
    """Request to move a job to a new status."""
    status: str


class JobResponse(BaseModel):
    """Job details."""
    id: str
    employer_id: str
    title: str
    description: str
    budget: Decimal
    required_skills: list[str]
    status: JobStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    employer: ProfileResponse | None = None

    @classmethod
    def from_job(cls, job: Job, employer: Profile | None = None) -> "JobResponse":
        return cls(
            id=job.id,
            employer_id=job.employer_id,
            title=job.title,
            description=job.description,
            budget=job.budget,
            required_skills=list(job.required_skills),
            status=job.status,
            created_at=job.created_at,
            updated_at=job.updated_at,
            employer=_profile(employer),
        )

    @classmethod
    def from_listing(cls, listing: JobListing) -> "JobResponse":
        return cls.from_job(listing.job, listing.employer)


class JobListResponse(BaseModel):
    """Page of jobs."""
    jobs: list[JobResponse]
    limit: int
    offset: int


# =============================================================================
# Application Models
# =============================================================================

class ApplicationCreate(BaseModel):
    """Request to apply to a job."""
    cover_letter: str
    proposed_rate: Decimal


class ApplicationDecision(BaseModel):
    """Employer's decision on a pending application."""
    decision: str


class ApplicationResponse(BaseModel):
    """Application details, with the related records when joined."""
    id: str
    job_id: str
    freelancer_id: str
    cover_letter: str
    proposed_rate: Decimal
    status: ApplicationStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    job: JobResponse | None = None
    freelancer: ProfileResponse | None = None

    @classmethod
    def from_application(cls, app: JobApplication) -> "ApplicationResponse":
        return cls(
            id=app.id,
            job_id=app.job_id,
            freelancer_id=app.freelancer_id,
            cover_letter=app.cover_letter,
            proposed_rate=app.proposed_rate,
            status=app.status,
            created_at=app.created_at,
            updated_at=app.updated_at,
        )

    @classmethod
    def from_listing(cls, listing: ApplicationListing) -> "ApplicationResponse":
        response = cls.from_application(listing.application)
        if listing.job:
            response.job = JobResponse.from_job(listing.job, listing.employer)
        response.freelancer = _profile(listing.freelancer)
        return response


class ApplicationListResponse(BaseModel):
    """List of applications."""
    applications: list[ApplicationResponse]
    total: int


class AppliedResponse(BaseModel):
    """Whether the caller already applied to a job."""
    job_id: str
    applied: bool


# =============================================================================
# Payment Models
# =============================================================================

class PaymentResponse(BaseModel):
    """Payment record with its job and parties."""
    id: str
    job_id: str
    freelancer_id: str
    employer_id: str
    amount: Decimal
    status: PaymentStatus
    created_at: datetime | None = None
    job: JobResponse | None = None
    employer: ProfileResponse | None = None
    freelancer: ProfileResponse | None = None

    @classmethod
    def from_payment(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id,
            job_id=payment.job_id,
            freelancer_id=payment.freelancer_id,
            employer_id=payment.employer_id,
            amount=payment.amount,
            status=payment.status,
            created_at=payment.created_at,
        )

    @classmethod
    def from_listing(cls, listing: PaymentListing) -> "PaymentResponse":
        response = cls.from_payment(listing.payment)
        if listing.job:
            response.job = JobResponse.from_job(listing.job)
        response.employer = _profile(listing.employer)
        response.freelancer = _profile(listing.freelancer)
        return response


class PaymentListResponse(BaseModel):
    """The caller's payments plus the completed total."""
    payments: list[PaymentResponse]
    total_completed: Decimal


# =============================================================================
# Dashboard
# =============================================================================

class DashboardResponse(BaseModel):
    """Per-role summary numbers."""
    role: Role
    total_jobs: int
    total_applications: int
    accepted_applications: int
    total_payments: Decimal
