"""Tests for job and application routes."""

import pytest


class TestAuthRequired:
    def test_missing_token(self, client):
        response = client.get("/api/v1/jobs")
        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/v1/jobs", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_token_without_profile(self, client, headers_for):
        response = client.get("/api/v1/jobs", headers=headers_for("no-such-user"))
        assert response.status_code == 401
        assert "profile" in response.json()["detail"].lower()


class TestJobRoutes:
    def test_create_job(self, client, employer_headers, employer):
        response = client.post(
            "/api/v1/jobs",
            json={
                "title": "Mobile app",
                "description": "Flutter client",
                "budget": "1200.50",
                "required_skills": ["Flutter", " Dart ", "Flutter"],
            },
            headers=employer_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "open"
        assert data["employer_id"] == employer.id
        assert data["required_skills"] == ["Flutter", "Dart"]
        assert data["budget"] == "1200.50"
        assert data["employer"]["full_name"] == employer.full_name

    def test_freelancer_cannot_post(self, client, freelancer_headers):
        response = client.post(
            "/api/v1/jobs",
            json={"title": "T", "description": "D", "budget": "10", "required_skills": ["x"]},
            headers=freelancer_headers,
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "validation_error",
            "detail": "Only employers can post jobs",
        }

    @pytest.mark.parametrize("payload,message", [
        ({"budget": "0", "required_skills": ["x"]}, "Budget must be positive"),
        ({"budget": "10", "required_skills": []}, "At least one required skill is needed"),
    ])
    def test_invalid_job(self, client, employer_headers, payload, message):
        body = {"title": "T", "description": "D", **payload}
        response = client.post("/api/v1/jobs", json=body, headers=employer_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == message

    def test_list_jobs_by_role(self, client, job, employer_headers, freelancer_headers, market, employer):
        started = market.jobs.create_job(employer, "Started", "D", budget=5, skills=["x"])
        market.jobs.transition_job(started, "in_progress", employer)

        mine = client.get("/api/v1/jobs", headers=employer_headers).json()
        assert {j["id"] for j in mine["jobs"]} == {job.id, started.id}

        browse = client.get("/api/v1/jobs", headers=freelancer_headers).json()
        assert [j["id"] for j in browse["jobs"]] == [job.id]
        assert browse["jobs"][0]["employer"]["id"] == employer.id

    def test_list_jobs_bad_status(self, client, freelancer_headers):
        response = client.get("/api/v1/jobs?status=funded", headers=freelancer_headers)
        assert response.status_code == 400

    def test_get_job(self, client, job, freelancer_headers):
        response = client.get(f"/api/v1/jobs/{job.id}", headers=freelancer_headers)
        assert response.status_code == 200
        assert response.json()["title"] == job.title

    def test_get_missing_job(self, client, freelancer_headers):
        response = client.get("/api/v1/jobs/missing", headers=freelancer_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_status_transition(self, client, job, employer_headers):
        url = f"/api/v1/jobs/{job.id}/status"
        response = client.post(url, json={"status": "in_progress"}, headers=employer_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"

        response = client.post(url, json={"status": "open"}, headers=employer_headers)
        assert response.status_code == 409
        assert response.json()["error"] == "invalid_transition"

    def test_status_transition_by_stranger(self, client, job, freelancer_headers):
        response = client.post(
            f"/api/v1/jobs/{job.id}/status", json={"status": "cancelled"}, headers=freelancer_headers
        )
        assert response.status_code == 403
        assert response.json()["error"] == "authorization_error"


class TestApplyRoutes:
    def test_apply_then_duplicate(self, client, job, freelancer_headers):
        url = f"/api/v1/jobs/{job.id}/applications"
        body = {"cover_letter": "I build these daily", "proposed_rate": "450"}

        first = client.post(url, json=body, headers=freelancer_headers)
        assert first.status_code == 201
        assert first.json()["status"] == "pending"
        assert first.json()["proposed_rate"] == "450"

        second = client.post(url, json=body, headers=freelancer_headers)
        assert second.status_code == 409
        assert second.json()["error"] == "duplicate_application"

    def test_employer_cannot_apply(self, client, job, employer_headers):
        response = client.post(
            f"/api/v1/jobs/{job.id}/applications",
            json={"cover_letter": "Hi", "proposed_rate": "10"},
            headers=employer_headers,
        )
        assert response.status_code == 403

    def test_apply_missing_job(self, client, freelancer_headers):
        response = client.post(
            "/api/v1/jobs/nope/applications",
            json={"cover_letter": "Hi", "proposed_rate": "10"},
            headers=freelancer_headers,
        )
        assert response.status_code == 404

    def test_applied_flag(self, client, job, market, freelancer, freelancer_headers):
        url = f"/api/v1/jobs/{job.id}/applied"
        assert client.get(url, headers=freelancer_headers).json()["applied"] is False
        market.jobs.submit_application(freelancer, job, "Hi", 10)
        assert client.get(url, headers=freelancer_headers).json()["applied"] is True

    def test_job_applications_owner_only(
        self, client, job, market, freelancer, employer_headers, freelancer_headers
    ):
        market.jobs.submit_application(freelancer, job, "Hi", 10)
        url = f"/api/v1/jobs/{job.id}/applications"

        response = client.get(url, headers=employer_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["applications"][0]["freelancer"]["id"] == freelancer.id

        assert client.get(url, headers=freelancer_headers).status_code == 403
