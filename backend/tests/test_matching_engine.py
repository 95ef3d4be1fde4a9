"""Tests for the candidate/job matching engine."""

import pytest

from fakes import FakeEmbedder, FakeInsights
from models.schemas.job import JobListing, JobRequirements
from services.errors import EnrichmentError
from services.gemini_client import INSIGHT_FALLBACK
from services.matching_engine import MAX_MATCHES, MatchingEngine, profile_embedding_text

STRONG = {
    "title": "Analytics Engineer",
    "required_skills": [{"name": "SQL", "level": 3, "required": True}],
    "experience_years": {"min": 2},
    "remote": True,
}

PARTIAL = {
    "title": "Data Engineer",
    "required_skills": [
        {"name": "SQL", "required": True},
        {"name": "Python", "required": True},
    ],
    "experience_years": {"min": 2},
    "remote": True,
}

POOR = {
    "title": "Systems Engineer",
    "required_skills": [
        {"name": "Go", "required": True},
        {"name": "Rust", "required": True},
    ],
    "experience_years": {"min": 10},
    "location": "Berlin",
}


def _listing(job_id: str, requirements: dict, description: str = "") -> JobListing:
    return JobListing(job_id=job_id, requirements=requirements, description=description)


class TestCalculateMatchScore:
    def setup_method(self):
        self.insights = FakeInsights(insights=["Solid SQL fit", "Consider cloud certifications"])
        self.engine = MatchingEngine(FakeEmbedder(), self.insights)

    @pytest.mark.asyncio
    async def test_perfect_match(self, sql_profile):
        result = await self.engine.calculate_match_score(sql_profile, JobRequirements(**STRONG))
        assert result.overall == 1.0
        assert result.is_match is True
        assert result.breakdown == {
            "skills": 1.0,
            "experience": 1.0,
            "education": 1.0,
            "location": 1.0,
            "salary": 1.0,
        }
        assert result.strengths == ["skills", "experience", "education", "location", "salary"]
        assert result.gaps == []
        assert result.insights == ["Solid SQL fit", "Consider cloud certifications"]
        assert "Remote work preference matches" in result.reasons

    @pytest.mark.asyncio
    async def test_poor_match_reports_gaps(self, sql_profile):
        result = await self.engine.calculate_match_score(sql_profile, JobRequirements(**POOR))
        assert result.is_match is False
        assert result.overall < 0.6
        assert result.gaps == ["Missing skills: Go, Rust", "Need 7 more years of experience"]
        assert "skills" not in result.strengths

    @pytest.mark.asyncio
    async def test_insight_failure_falls_back(self, sql_profile):
        engine = MatchingEngine(FakeEmbedder(), FakeInsights(raises=RuntimeError("quota")))
        result = await engine.calculate_match_score(sql_profile, JobRequirements(**STRONG))
        assert result.insights == [INSIGHT_FALLBACK]
        assert result.overall == 1.0

    @pytest.mark.asyncio
    async def test_prompt_carries_scores(self, sql_profile):
        await self.engine.calculate_match_score(sql_profile, JobRequirements(**STRONG))
        assert "- skills: 1.00" in self.insights.prompts[0]


class TestFindMatches:
    @pytest.mark.asyncio
    async def test_ranked_by_detailed_score(self, sql_profile):
        embedder = FakeEmbedder(vectors={"low-similarity": [0.0, 1.0, 0.0]})
        engine = MatchingEngine(embedder, FakeInsights())
        matches = await engine.find_matches(sql_profile, [
            _listing("partial", PARTIAL),
            _listing("poor", POOR),
            _listing("strong", STRONG, description="low-similarity"),
        ])
        assert [m.job_id for m in matches] == ["strong", "partial"]
        assert matches[0].score == 1.0
        assert matches[0].similarity == 0.0
        assert matches[1].gaps == ["Missing skills: Python"]

    @pytest.mark.asyncio
    async def test_shortlist_and_truncation(self, sql_profile):
        embedder = FakeEmbedder(vectors={"low-similarity": [0.0, 1.0, 0.0]})
        engine = MatchingEngine(embedder, FakeInsights())
        listings = [_listing(f"job-{i}", STRONG) for i in range(20)]
        listings += [_listing(f"far-{i}", STRONG, description="low-similarity") for i in range(5)]

        matches = await engine.find_matches(sql_profile, listings)
        assert len(matches) == MAX_MATCHES
        assert all(m.job_id.startswith("job-") for m in matches)

    @pytest.mark.asyncio
    async def test_listing_embedding_failure_uses_tfidf(self, sql_profile):
        embedder = FakeEmbedder(fail_on=("flaky",))
        engine = MatchingEngine(embedder, FakeInsights())
        matches = await engine.find_matches(sql_profile, [_listing("flaky-job", STRONG, "flaky")])
        assert [m.job_id for m in matches] == ["flaky-job"]
        assert 0.0 <= matches[0].similarity <= 1.0

    @pytest.mark.asyncio
    async def test_candidate_embedding_failure_propagates(self, sql_profile):
        engine = MatchingEngine(FakeEmbedder(fail_on=("Roles:",)), FakeInsights())
        with pytest.raises(EnrichmentError):
            await engine.find_matches(sql_profile, [_listing("strong", STRONG)])

    @pytest.mark.asyncio
    async def test_no_listings(self, sql_profile):
        engine = MatchingEngine(FakeEmbedder(), FakeInsights())
        assert await engine.find_matches(sql_profile, []) == []


def test_profile_embedding_text(sql_profile):
    text = profile_embedding_text(sql_profile)
    assert "Skills: SQL" in text
    assert "Roles: Data Analyst" in text
    assert "Remote: yes" in text
