"""Shared test configuration, pytest markers and record fixtures."""

import pytest

from fakes import LEGIT_DESCRIPTION
from models.schemas.job import JobPosting, PosterAccount
from models.schemas.profile import CandidateProfile


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads real ML models or calls live services (slow)"
    )


@pytest.fixture
def legit_posting() -> JobPosting:
    return JobPosting(
        title="Backend Engineer",
        company="Acme Payments",
        company_url="https://acmepayments.example.com",
        description=LEGIT_DESCRIPTION,
        requirements="3+ years of Python, PostgreSQL experience, familiarity with distributed systems.",
        salary_min=90_000,
        salary_max=120_000,
        experience_min=3,
        contact_email="jobs@acmepayments.com",
    )


@pytest.fixture
def recruiter() -> PosterAccount:
    return PosterAccount(
        user_id="u-1",
        email="hr@acmepayments.com",
        verification_status="VERIFIED",
        trust_score=0.9,
        role="RECRUITER",
    )


@pytest.fixture
def sql_profile() -> CandidateProfile:
    return CandidateProfile(
        user_id="cand-1",
        skills=[{"name": "SQL", "level": 4}],
        experience=[{"title": "Data Analyst", "company": "Initech", "duration": 3}],
        education=[{"degree": "bachelor", "field": "Statistics"}],
        preferences={"locations": ["Austin, TX"], "remote": True, "salary_min": 80_000},
    )
