"""Tests for job posting, listing and lifecycle in JobService."""

import copy
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from gigboard.marketplace.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from gigboard.marketplace.jobs.models import JobStatus
from gigboard.marketplace.jobs.service import JobSearchFilters


class TestJobCreation:
    """Tests for job creation."""

    def test_create_job_basic(self, service, job_storage, employer):
        """A new job is open, owned by the caller and stored."""
        job = service.create_job(
            employer,
            title="API integration",
            description="Connect our CRM",
            budget=500,
            skills=["Python", "REST"],
        )

        assert job.status == "open"
        assert job.employer_id == employer.id
        assert job.budget == Decimal("500")
        assert job.required_skills == ["Python", "REST"]
        assert job.created_at is not None
        assert job_storage.get_job(job.id) is job

    @pytest.mark.parametrize("budget", [0, -10, "0"])
    def test_create_job_non_positive_budget_fails(self, service, employer, budget):
        with pytest.raises(ValidationError, match="positive"):
            service.create_job(employer, "Title", "Desc", budget=budget, skills=["React"])

    def test_create_job_without_skills_fails(self, service, employer):
        with pytest.raises(ValidationError, match="skill"):
            service.create_job(employer, "Title", "Desc", budget=10, skills=[])

    def test_freelancer_cannot_post(self, service, freelancer, job_storage):
        """Posting is an employer-only action; nothing is stored."""
        with pytest.raises(ValidationError, match="Only employers"):
            service.create_job(freelancer, "Title", "Desc", budget=10, skills=["React"])
        assert job_storage.count_jobs() == 0

    def test_title_limit_from_config(self, job_storage, profile_storage, employer):
        from gigboard.marketplace.config import MarketplaceConfig
        from gigboard.marketplace.jobs.service import JobService

        short = JobService(job_storage, config=MarketplaceConfig(max_title_length=10))
        with pytest.raises(ValidationError, match="max 10"):
            short.create_job(employer, "Much too long a title", "Desc", budget=1, skills=["x"])

    def test_too_many_skills(self, job_storage, employer):
        from gigboard.marketplace.config import MarketplaceConfig
        from gigboard.marketplace.jobs.service import JobService

        capped = JobService(job_storage, config=MarketplaceConfig(max_skills=2))
        with pytest.raises(ValidationError, match="Too many skills"):
            capped.create_job(employer, "Title", "Desc", budget=1, skills=["a", "b", "c"])


class TestJobRetrieval:
    """Tests for job lookup and listing."""

    def test_get_job_not_found(self, service):
        with pytest.raises(NotFoundError, match="Job not found"):
            service.get_job("missing")

    def test_employer_sees_own_jobs_newest_first(self, service, employer, other_employer):
        first = service.create_job(employer, "First", "Desc", budget=10, skills=["a"])
        second = service.create_job(employer, "Second", "Desc", budget=10, skills=["a"])
        service.create_job(other_employer, "Other", "Desc", budget=10, skills=["a"])

        jobs = service.list_jobs(employer)
        assert [j.id for j in jobs] == [second.id, first.id]

    def test_freelancer_sees_open_jobs(self, service, employer, freelancer):
        open_job = service.create_job(employer, "Open", "Desc", budget=10, skills=["a"])
        started = service.create_job(employer, "Started", "Desc", budget=10, skills=["a"])
        service.transition_job(started, JobStatus.IN_PROGRESS, employer)

        jobs = service.list_jobs(freelancer)
        assert [j.id for j in jobs] == [open_job.id]

    def test_skills_filter_matches_any(self, service, employer, freelancer):
        react = service.create_job(employer, "R", "Desc", budget=10, skills=["React"])
        service.create_job(employer, "G", "Desc", budget=10, skills=["Go"])
        both = service.create_job(employer, "B", "Desc", budget=10, skills=["Vue", "React"])

        jobs = service.list_jobs(freelancer, JobSearchFilters(skills=["React"]))
        assert {j.id for j in jobs} == {react.id, both.id}

    def test_invalid_status_filter(self, service, freelancer):
        with pytest.raises(ValidationError, match="Invalid job status filter"):
            service.list_jobs(freelancer, JobSearchFilters(status="funded"))

    def test_limit_is_clamped(self, service, employer, config):
        for i in range(3):
            service.create_job(employer, f"Job {i}", "Desc", budget=10, skills=["a"])

        assert len(service.list_jobs(employer, JobSearchFilters(limit=2))) == 2
        assert len(service.list_jobs(employer, JobSearchFilters(limit=10_000))) == 3

    def test_newest_first_uses_created_at(self, service, job_storage, employer):
        older = service.create_job(employer, "Older", "Desc", budget=10, skills=["a"])
        newer = service.create_job(employer, "Newer", "Desc", budget=10, skills=["a"])
        older.created_at = datetime.now(timezone.utc) + timedelta(hours=1)

        assert [j.id for j in service.list_jobs(employer)] == [older.id, newer.id]

    def test_job_listings_join_employer(self, service, job, employer, freelancer):
        listings = service.list_job_listings(freelancer)
        assert len(listings) == 1
        assert listings[0].job.id == job.id
        assert listings[0].employer.full_name == employer.full_name


class TestJobTransitions:
    """Tests for the job lifecycle."""

    def test_full_lifecycle(self, service, job, employer, job_storage):
        service.transition_job(job, "in_progress", employer)
        assert job.status == "in_progress"
        service.transition_job(job, JobStatus.COMPLETED, employer)
        assert job.status == "completed"
        assert job_storage.get_job(job.id).status == "completed"

    @pytest.mark.parametrize("start", [[], ["in_progress"]])
    def test_cancel_from_active_states(self, service, job, employer, start):
        for status in start:
            service.transition_job(job, status, employer)
        service.transition_job(job, "cancelled", employer)
        assert job.status == "cancelled"

    def test_cannot_skip_to_completed(self, service, job, employer):
        with pytest.raises(InvalidTransitionError, match="open to completed"):
            service.transition_job(job, "completed", employer)
        assert job.status == "open"

    @pytest.mark.parametrize("terminal", ["completed", "cancelled"])
    def test_terminal_states_are_final(self, service, job, employer, terminal):
        if terminal == "completed":
            service.transition_job(job, "in_progress", employer)
        service.transition_job(job, terminal, employer)

        for target in ["open", "in_progress", "completed", "cancelled"]:
            with pytest.raises(InvalidTransitionError):
                service.transition_job(job, target, employer)

    def test_stale_copy_cannot_reopen_terminal_job(self, service, job, employer, job_storage):
        stale = copy.copy(job_storage.get_job(job.id))

        service.transition_job(job, "cancelled", employer)
        with pytest.raises(InvalidTransitionError, match="from cancelled"):
            service.transition_job(stale, "in_progress", employer)

        assert job_storage.get_job(job.id).status == "cancelled"

    def test_same_status_is_not_a_transition(self, service, job, employer):
        with pytest.raises(InvalidTransitionError):
            service.transition_job(job, "open", employer)

    def test_unknown_status(self, service, job, employer):
        with pytest.raises(InvalidTransitionError):
            service.transition_job(job, "archived", employer)

    def test_only_owner_can_transition(self, service, job, other_employer, freelancer):
        for actor in (other_employer, freelancer):
            with pytest.raises(AuthorizationError, match="Only the job's employer"):
                service.transition_job(job, "in_progress", actor)
        assert job.status == "open"

    def test_transition_missing_job(self, service, job, employer, job_storage):
        job_storage._jobs.pop(job.id)
        with pytest.raises(NotFoundError):
            service.transition_job(job, "in_progress", employer)
