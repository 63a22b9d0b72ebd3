"""Pytest configuration and fixtures for the API."""

import os
import secrets
import tempfile
from unittest.mock import MagicMock

import pytest

# Generate a unique test secret for this test run to prevent token forgery
_TEST_JWT_SECRET = f"test-only-{secrets.token_urlsafe(32)}"

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", _TEST_JWT_SECRET)
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("GIGBOARD_DATA_DIR", tempfile.mkdtemp(prefix="gigboard-tests-"))

from app.auth import create_access_token  # noqa: E402
from app.config import get_settings  # noqa: E402
from app.database import build_marketplace, get_auth_client, get_db, get_marketplace  # noqa: E402
from app.main import app  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from gigboard.marketplace.config import MarketplaceConfig  # noqa: E402
from gigboard.marketplace.jobs.storage import InMemoryJobStorage  # noqa: E402
from gigboard.marketplace.payments.storage import InMemoryPaymentStorage  # noqa: E402
from gigboard.marketplace.profiles.storage import InMemoryProfileStorage  # noqa: E402


@pytest.fixture
def market():
    """Marketplace services over fresh in-memory storage."""
    storage = (InMemoryProfileStorage(), InMemoryJobStorage(), InMemoryPaymentStorage())
    return build_marketplace(storage, MarketplaceConfig())


@pytest.fixture
def db_mock():
    """Stand-in for the Supabase data client."""
    return MagicMock()


@pytest.fixture
def auth_client_mock():
    """Stand-in for the Supabase client used for sign-up/sign-in."""
    return MagicMock()


@pytest.fixture
def client(market, db_mock, auth_client_mock):
    """Create a test client wired to the in-memory marketplace."""
    app.dependency_overrides[get_marketplace] = lambda: market
    app.dependency_overrides[get_db] = lambda: db_mock
    app.dependency_overrides[get_auth_client] = lambda: auth_client_mock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    """Build a bearer header carrying a Supabase-style access token."""

    def _headers(profile_id: str) -> dict:
        token = create_access_token(profile_id, get_settings(), email=f"{profile_id}@example.com")
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def employer(market):
    return market.profiles.create_profile("emp-1", "emp-1@example.com", "Erin Employer", "employer")


@pytest.fixture
def freelancer(market):
    return market.profiles.create_profile("fl-1", "fl-1@example.com", "Fay Freelancer", "freelancer")


@pytest.fixture
def other_freelancer(market):
    return market.profiles.create_profile("fl-2", "fl-2@example.com", "Finn Second", "freelancer")


@pytest.fixture
def employer_headers(employer, headers_for):
    return headers_for(employer.id)


@pytest.fixture
def freelancer_headers(freelancer, headers_for):
    return headers_for(freelancer.id)


@pytest.fixture
def job(market, employer):
    return market.jobs.create_job(
        employer,
        title="Build a landing page",
        description="React single page site",
        budget="500",
        skills=["React"],
    )
