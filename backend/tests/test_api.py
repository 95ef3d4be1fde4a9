import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_bot_detection, get_job_verification, get_matching_engine
from api.router import limiter
from fakes import LEGIT_DESCRIPTION, FakeCompanyLookup, FakeEmbedder, FakeInsights
from main import app
from services.bot_detection import BotDetectionService
from services.cache import MemoCache
from services.errors import EnrichmentError
from services.job_verification import JobVerificationService
from services.matching_engine import MatchingEngine

client = TestClient(app)

PROFILE = {
    "user_id": "cand-1",
    "skills": [{"name": "SQL", "level": 4}],
    "experience": [{"title": "Data Analyst", "company": "Initech", "duration": 3}],
    "education": [{"degree": "bachelor"}],
    "preferences": {"remote": True},
}

REQUIREMENTS = {
    "title": "Analytics Engineer",
    "required_skills": [{"name": "SQL", "level": 3, "required": True}],
    "experience_years": {"min": 2},
    "remote": True,
}


class _UnavailableMatching:
    async def calculate_match_score(self, profile, requirements):
        raise EnrichmentError("embedding service down")

    async def find_matches(self, profile, listings):
        raise EnrichmentError("embedding service down")


@pytest.fixture(autouse=True)
def fake_engines():
    limiter.enabled = False
    app.dependency_overrides[get_matching_engine] = lambda: MatchingEngine(FakeEmbedder(), FakeInsights())
    app.dependency_overrides[get_bot_detection] = lambda: BotDetectionService()
    app.dependency_overrides[get_job_verification] = lambda: JobVerificationService(
        FakeCompanyLookup(), FakeInsights(), cache=MemoCache()
    )
    yield
    app.dependency_overrides.clear()
    limiter.enabled = True


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "gemini_configured" in data


def test_match_score():
    response = client.post(
        "/match/score",
        json={"candidate_profile": PROFILE, "job_requirements": REQUIREMENTS},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["overall"] == 1.0
    assert data["is_match"] is True
    assert set(data["breakdown"]) == {"skills", "experience", "education", "location", "salary"}
    assert data["insights"] == ["Strong skills overlap"]


def test_match_rank():
    response = client.post(
        "/match/rank",
        json={
            "candidate_profile": PROFILE,
            "listings": [{"job_id": "job-1", "requirements": REQUIREMENTS}],
        },
    )
    assert response.status_code == 200
    matches = response.json()["matches"]
    assert [m["job_id"] for m in matches] == ["job-1"]


def test_match_score_rejects_invalid_skill_level():
    profile = dict(PROFILE, skills=[{"name": "SQL", "level": 9}])
    response = client.post(
        "/match/score",
        json={"candidate_profile": profile, "job_requirements": REQUIREMENTS},
    )
    assert response.status_code == 422


def test_match_score_rejects_unknown_education_level():
    requirements = dict(REQUIREMENTS, education={"level": "wizard"})
    response = client.post(
        "/match/score",
        json={"candidate_profile": PROFILE, "job_requirements": requirements},
    )
    assert response.status_code == 422


def test_enrichment_failure_is_service_unavailable():
    app.dependency_overrides[get_matching_engine] = lambda: _UnavailableMatching()
    response = client.post(
        "/match/rank",
        json={"candidate_profile": PROFILE, "listings": []},
    )
    assert response.status_code == 503
    assert response.json()["detail"] == "Unable to evaluate now"


def test_bot_registration():
    response = client.post(
        "/bot/registration",
        json={"email": "bot1234@test.com", "username": "bot_abc"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["is_bot"] is True
    assert data["risk_level"] in ("HIGH", "CRITICAL")


def test_bot_registration_rejects_bad_username():
    response = client.post(
        "/bot/registration",
        json={"email": "maria@example.com", "username": "has spaces"},
    )
    assert response.status_code == 422


def test_bot_login():
    response = client.post(
        "/bot/login",
        json={"email": "maria@example.com", "user_agent": "Mozilla/5.0 HeadlessChrome/121.0"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["risk_score"] == 65
    assert data["is_bot"] is True


def test_verify_job():
    response = client.post(
        "/jobs/verify",
        json={
            "posting": {
                "title": "Backend Engineer",
                "company": "Acme Payments",
                "description": LEGIT_DESCRIPTION,
                "requirements": "3+ years of Python, PostgreSQL experience, distributed systems knowledge.",
                "contact_email": "jobs@acmepayments.com",
                "salary_min": 90000,
                "salary_max": 120000,
                "experience_min": 3,
            },
            "poster": {
                "user_id": "u-1",
                "email": "hr@acmepayments.com",
                "verification_status": "VERIFIED",
                "trust_score": 0.9,
            },
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["verification_score"] == 70
    assert data["is_verified"] is True
    assert data["company_data"] is None


def test_verify_job_rejects_short_description():
    response = client.post(
        "/jobs/verify",
        json={
            "posting": {"title": "Dev", "company": "Acme", "description": "too short"},
            "poster": {"user_id": "u-1", "email": "hr@acme.com"},
        },
    )
    assert response.status_code == 422


class _BrokenSiteLookup(FakeCompanyLookup):
    async def fetch_page(self, url: str) -> str:
        raise RuntimeError("decoding failed")


def test_verify_job_survives_website_adapter_crash():
    app.dependency_overrides[get_job_verification] = lambda: JobVerificationService(
        _BrokenSiteLookup(), FakeInsights(), cache=MemoCache()
    )
    response = client.post(
        "/jobs/verify",
        json={
            "posting": {
                "title": "Backend Engineer",
                "company": "Acme Payments",
                "company_url": "https://acmepayments.example.com",
                "description": LEGIT_DESCRIPTION,
                "contact_email": "jobs@acmepayments.com",
            },
            "poster": {"user_id": "u-1", "email": "hr@acmepayments.com", "verification_status": "VERIFIED"},
        },
    )
    assert response.status_code == 200
    assert response.json()["breakdown"]["company"] == 0
