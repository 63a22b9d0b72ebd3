"""Tests for the service banner, health check, error mapping and rate limit keys."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from app.main import ERROR_STATUS
from app.rate_limit import get_client_ip

from gigboard.marketplace.errors import (
    AuthorizationError,
    DuplicateApplicationError,
    InvalidTransitionError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)


class TestBanner:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "gigboard-backend"


class TestHealth:
    def test_healthy(self, client, monkeypatch):
        monkeypatch.setattr("app.database.get_supabase_client", lambda: MagicMock())

        data = client.get("/health").json()

        assert data == {"status": "healthy", "database": "connected"}

    def test_degraded(self, client, monkeypatch):
        broken = MagicMock()
        broken.table.side_effect = RuntimeError("connection refused")
        monkeypatch.setattr("app.database.get_supabase_client", lambda: broken)

        data = client.get("/health").json()

        assert data["status"] == "degraded"
        assert data["database"].startswith("error: connection refused")


class TestErrorMapping:
    @pytest.mark.parametrize("error,status", [
        (ValidationError("bad"), 400),
        (AuthorizationError("no"), 403),
        (NotFoundError("Job", "x"), 404),
        (DuplicateApplicationError("job-1", "fl-1"), 409),
        (InvalidTransitionError("nope"), 409),
        (StoreUnavailableError("down"), 503),
    ])
    def test_kind_to_status(self, error, status):
        assert ERROR_STATUS[error.kind] == status

    def test_store_failure_hides_detail(self, client, market, freelancer_headers, monkeypatch):
        def boom(*args, **kwargs):
            raise StoreUnavailableError("postgres exploded at 10.0.0.5")

        monkeypatch.setattr(market.jobs.storage, "list_jobs", boom)

        response = client.get("/api/v1/jobs", headers=freelancer_headers)

        assert response.status_code == 503
        assert response.json() == {
            "error": "store_unavailable",
            "detail": "Data store temporarily unavailable",
        }


def _request(peer: str, forwarded: str | None = None):
    headers = {"x-forwarded-for": forwarded} if forwarded else {}
    return SimpleNamespace(client=SimpleNamespace(host=peer), headers=headers)


class TestClientIp:
    def test_direct_client(self):
        assert get_client_ip(_request("203.0.113.7", "1.2.3.4")) == "203.0.113.7"

    def test_trusted_proxy(self):
        assert get_client_ip(_request("10.0.0.2", "198.51.100.9, 10.0.0.2")) == "198.51.100.9"

    def test_trusted_proxy_without_header(self):
        assert get_client_ip(_request("127.0.0.1")) == "127.0.0.1"
