"""Tests for marketplace data models."""

from decimal import Decimal

import pytest

from gigboard.marketplace.errors import ValidationError
from gigboard.marketplace.jobs.models import (
    VALID_JOB_TRANSITIONS,
    ApplicationStatus,
    Job,
    JobApplication,
    JobStatus,
)
from gigboard.marketplace.payments.models import Payment, PaymentStatus
from gigboard.marketplace.profiles.models import Profile, ProfileRole


def make_job(**overrides) -> Job:
    fields = {
        "id": "job-1",
        "employer_id": "emp-1",
        "title": "Logo design",
        "description": "Design a logo",
        "budget": "250",
        "required_skills": ["Figma"],
    }
    fields.update(overrides)
    return Job(**fields)


class TestProfile:
    """Tests for the Profile model."""

    def test_role_enum_is_normalized(self):
        """Enum roles are stored as their string value."""
        profile = Profile(id="u1", email="a@b.c", role=ProfileRole.EMPLOYER)
        assert profile.role == "employer"
        assert profile.is_employer
        assert not profile.is_freelancer

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError, match="Invalid role"):
            Profile(id="u1", email="a@b.c", role="admin")

    def test_skills_are_normalized(self):
        """Blank and duplicate skills are dropped, order kept."""
        profile = Profile(
            id="u1", email="a@b.c", role="freelancer", skills=[" Python ", "", "Go", "Python"]
        )
        assert profile.skills == ["Python", "Go"]

    def test_from_dict_fills_blank_columns(self):
        profile = Profile.from_dict(
            {"id": "u1", "email": "a@b.c", "role": "freelancer", "bio": None, "skills": None}
        )
        assert profile.bio == ""
        assert profile.skills == []


class TestJobModel:
    """Tests for the Job model."""

    def test_budget_becomes_decimal(self):
        job = make_job(budget=99.99)
        assert job.budget == Decimal("99.99")

    @pytest.mark.parametrize("budget", [0, -1, "0.00"])
    def test_non_positive_budget_rejected(self, budget):
        with pytest.raises(ValidationError, match="Budget must be positive"):
            make_job(budget=budget)

    def test_non_numeric_budget_rejected(self):
        with pytest.raises(ValidationError, match="Invalid budget"):
            make_job(budget="lots")

    def test_empty_skills_rejected(self):
        with pytest.raises(ValidationError, match="required skill"):
            make_job(required_skills=["  "])

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError, match="Title is required"):
            make_job(title="   ")

    def test_long_title_rejected(self):
        with pytest.raises(ValidationError, match="too long"):
            make_job(title="x" * 201)

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError, match="Invalid status"):
            make_job(status="funded")

    def test_lifecycle_table(self):
        """open -> in_progress -> completed, cancel from either; the rest is terminal."""
        assert VALID_JOB_TRANSITIONS["open"] == {"in_progress", "cancelled"}
        assert VALID_JOB_TRANSITIONS["in_progress"] == {"completed", "cancelled"}
        assert make_job(status="completed").is_terminal
        assert make_job(status="cancelled").is_terminal
        assert not make_job().is_terminal

    def test_can_transition_to(self):
        job = make_job()
        assert job.can_transition_to(JobStatus.IN_PROGRESS)
        assert job.can_transition_to("cancelled")
        assert not job.can_transition_to("completed")
        assert not job.can_transition_to("open")

    def test_row_round_trip_keeps_budget_exact(self):
        job = make_job(budget="1234.56")
        row = job.to_dict()
        assert row["budget"] == "1234.56"
        assert Job.from_dict(row).budget == Decimal("1234.56")


class TestJobApplicationModel:
    """Tests for the JobApplication model."""

    def test_defaults_to_pending(self):
        app = JobApplication(
            id="a1", job_id="j1", freelancer_id="f1", cover_letter="Hi", proposed_rate="450"
        )
        assert app.status == "pending"
        assert app.is_pending
        assert app.can_transition_to(ApplicationStatus.ACCEPTED)
        assert app.can_transition_to("rejected")

    def test_non_positive_rate_rejected(self):
        with pytest.raises(ValidationError, match="Proposed rate must be positive"):
            JobApplication(
                id="a1", job_id="j1", freelancer_id="f1", cover_letter="Hi", proposed_rate=0
            )

    def test_blank_cover_letter_rejected(self):
        with pytest.raises(ValidationError, match="Cover letter is required"):
            JobApplication(
                id="a1", job_id="j1", freelancer_id="f1", cover_letter=" ", proposed_rate=10
            )

    @pytest.mark.parametrize("status", ["accepted", "rejected"])
    def test_decided_is_terminal(self, status):
        app = JobApplication(
            id="a1",
            job_id="j1",
            freelancer_id="f1",
            cover_letter="Hi",
            proposed_rate=10,
            status=status,
        )
        assert app.is_terminal
        assert not app.can_transition_to("pending")


class TestPaymentModel:
    """Tests for the Payment model."""

    def test_payment_is_immutable(self):
        payment = Payment(
            id="p1", job_id="j1", freelancer_id="f1", employer_id="e1", amount="100"
        )
        with pytest.raises(AttributeError):
            payment.status = "completed"

    def test_status_enum_normalized(self):
        payment = Payment(
            id="p1",
            job_id="j1",
            freelancer_id="f1",
            employer_id="e1",
            amount=Decimal("100"),
            status=PaymentStatus.COMPLETED,
        )
        assert payment.status == "completed"
        assert payment.is_completed

    def test_non_positive_amount_rejected(self):
        with pytest.raises(ValidationError, match="Amount must be positive"):
            Payment(id="p1", job_id="j1", freelancer_id="f1", employer_id="e1", amount="-5")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="Invalid status"):
            Payment(
                id="p1",
                job_id="j1",
                freelancer_id="f1",
                employer_id="e1",
                amount="5",
                status="refunded",
            )
