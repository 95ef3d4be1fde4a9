"""Candidate/job matching engine.

Scores a candidate profile against job requirements with five weighted
categories, and ranks a set of job listings for a candidate: embedding
similarity shortlists the listings, the detailed match score decides.
"""

import logging

from models.responses import MatchScoreResponse, RankedMatch
from models.schemas.job import JobListing, JobRequirements
from models.schemas.profile import CandidateProfile
from models.schemas.signal import Evaluation
from services import prompt_builder
from services.errors import EnrichmentError
from services.gemini_client import INSIGHT_FALLBACK, TextInsightAdapter
from services.scoring import explain
from services.scoring.aggregator import WeightedAverage
from services.scoring.base import SignalSpec
from services.scoring.classifier import match_classifier
from services.scoring.engine import ScoringEngine
from services.signals import matching
from services.signals.matching import MatchSubject
from services.similarity import (
    EmbeddingAdapter,
    tfidf_cosine_similarity,
    vector_cosine_similarity,
)

logger = logging.getLogger(__name__)

MATCH_WEIGHTS = {
    "skills": 0.35,
    "experience": 0.25,
    "education": 0.15,
    "location": 0.15,
    "salary": 0.10,
}

SHORTLIST_SIZE = 20
MAX_MATCHES = 10


def profile_embedding_text(profile: CandidateProfile) -> str:
    prefs = profile.preferences
    skills = ", ".join(s.name for s in profile.skills)
    roles = ", ".join(e.title for e in profile.experience)
    return (
        f"Skills: {skills}\n"
        f"Roles: {roles}\n"
        f"Looking for: {', '.join(prefs.job_types)}\n"
        f"Industries: {', '.join(prefs.industries)}\n"
        f"Location: {', '.join(prefs.locations)}\n"
        f"Remote: {'yes' if prefs.remote else 'no'}"
    )


class MatchingEngine:
    def __init__(self, embedder: EmbeddingAdapter, insights: TextInsightAdapter) -> None:
        self.embedder = embedder
        self.insights = insights
        self.engine = ScoringEngine(
            "matching",
            signals=[
                SignalSpec("skills", matching.skills_signal),
                SignalSpec("experience", matching.experience_signal),
                SignalSpec("education", matching.education_signal),
                SignalSpec("location", matching.location_signal),
                SignalSpec("salary", matching.salary_signal),
            ],
            aggregator=WeightedAverage(MATCH_WEIGHTS),
            classifier=match_classifier(),
            report_strengths=True,
        )

    async def evaluate(self, profile: CandidateProfile, requirements: JobRequirements) -> Evaluation:
        return await self.engine.evaluate(MatchSubject(profile, requirements))

    def identify_gaps(self, profile: CandidateProfile, requirements: JobRequirements) -> list[str]:
        gaps = [
            explain.format_missing_skills(matching.missing_required_skills(profile, requirements)),
            explain.format_experience_shortfall(matching.experience_shortfall(profile, requirements)),
        ]
        return [g for g in gaps if g]

    async def _generate_insights(
        self,
        profile: CandidateProfile,
        requirements: JobRequirements,
        breakdown: dict[str, float],
    ) -> list[str]:
        prompt = prompt_builder.build_match_insights_prompt(profile, requirements, breakdown)
        try:
            return await self.insights.generate_insights(prompt)
        except Exception as e:
            logger.error("Error generating match insights: %s", e)
            return [INSIGHT_FALLBACK]

    async def calculate_match_score(
        self,
        profile: CandidateProfile,
        requirements: JobRequirements,
    ) -> MatchScoreResponse:
        evaluation = await self.evaluate(profile, requirements)
        breakdown = evaluation.composite.breakdown
        insights = await self._generate_insights(profile, requirements, breakdown)

        return MatchScoreResponse(
            overall=evaluation.composite.value,
            is_match=evaluation.decision.positive,
            breakdown=breakdown,
            insights=insights,
            reasons=list(evaluation.decision.reasons),
            strengths=evaluation.strengths,
            gaps=self.identify_gaps(profile, requirements),
        )

    async def _similarity(self, profile_text: str, profile_vector: list[float], listing: JobListing) -> float:
        listing_text = listing.embedding_text()
        try:
            listing_vector = await self.embedder.embed(listing_text)
        except EnrichmentError as e:
            logger.warning("Embedding failed for job %s, using TF-IDF similarity: %s", listing.job_id, e)
            return tfidf_cosine_similarity(profile_text, listing_text)
        return vector_cosine_similarity(profile_vector, listing_vector)

    async def find_matches(
        self,
        profile: CandidateProfile,
        listings: list[JobListing],
    ) -> list[RankedMatch]:
        """Top matching listings, best first.

        The candidate embedding is required: its failure propagates as
        ``EnrichmentError``. Listing embeddings degrade to TF-IDF similarity.
        """
        profile_text = profile_embedding_text(profile)
        profile_vector = await self.embedder.embed(profile_text)

        similarities = []
        for listing in listings:
            similarities.append((await self._similarity(profile_text, profile_vector, listing), listing))
        similarities.sort(key=lambda pair: pair[0], reverse=True)

        matches: list[RankedMatch] = []
        for similarity, listing in similarities[:SHORTLIST_SIZE]:
            evaluation = await self.evaluate(profile, listing.requirements)
            if not evaluation.decision.positive:
                continue
            matches.append(RankedMatch(
                job_id=listing.job_id,
                score=evaluation.composite.value,
                similarity=round(similarity, 4),
                reasons=list(evaluation.decision.reasons),
                strengths=evaluation.strengths,
                gaps=self.identify_gaps(profile, listing.requirements),
            ))

        matches.sort(key=lambda m: m.score, reverse=True)
        logger.info(
            "Ranked %d listings for %s: %d matches",
            len(listings), profile.user_id, min(len(matches), MAX_MATCHES),
        )
        return matches[:MAX_MATCHES]
