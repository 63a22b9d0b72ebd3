"""Shared fixtures for marketplace tests."""

from decimal import Decimal

import pytest

from gigboard.marketplace.config import MarketplaceConfig
from gigboard.marketplace.jobs.service import JobService
from gigboard.marketplace.jobs.storage import InMemoryJobStorage
from gigboard.marketplace.payments.service import PaymentLedger
from gigboard.marketplace.payments.storage import InMemoryPaymentStorage
from gigboard.marketplace.profiles.service import ProfileService
from gigboard.marketplace.profiles.storage import InMemoryProfileStorage


@pytest.fixture
def config():
    """Create test configuration."""
    return MarketplaceConfig(default_page_size=20, max_page_size=100)


@pytest.fixture
def profile_storage():
    return InMemoryProfileStorage()


@pytest.fixture
def job_storage():
    return InMemoryJobStorage()


@pytest.fixture
def payment_storage():
    return InMemoryPaymentStorage()


@pytest.fixture
def profiles(profile_storage, config):
    """Profile service over in-memory storage."""
    return ProfileService(profile_storage, config=config)


@pytest.fixture
def service(job_storage, profile_storage, config):
    """Job service over in-memory storage."""
    return JobService(storage=job_storage, config=config, profiles=profile_storage)


@pytest.fixture
def ledger(payment_storage, job_storage, profile_storage, config):
    """Payment ledger over in-memory storage."""
    return PaymentLedger(payment_storage, config=config, jobs=job_storage, profiles=profile_storage)


@pytest.fixture
def employer(profiles):
    return profiles.create_profile("emp-1", "erin@example.com", "Erin Employer", "employer")


@pytest.fixture
def other_employer(profiles):
    return profiles.create_profile("emp-2", "omar@example.com", "Omar Owner", "employer")


@pytest.fixture
def freelancer(profiles):
    return profiles.create_profile("fl-1", "fay@example.com", "Fay Freelancer", "freelancer")


@pytest.fixture
def other_freelancer(profiles):
    return profiles.create_profile("fl-2", "finn@example.com", "Finn Second", "freelancer")


@pytest.fixture
def job(service, employer):
    """An open job posted by ``employer``."""
    return service.create_job(
        employer,
        title="Build a landing page",
        description="React + Tailwind single page site",
        budget=Decimal("500"),
        skills=["React", "CSS"],
    )
