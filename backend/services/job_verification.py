"""Job-posting authenticity verification.

Flow:
    posting + poster
      ├─ CompanyVerifier.verify()        (website → known list → AI opinion, memoized)
      ├─ content authenticity (AI)       (failure is neutral)
      └─ ScoringEngine over six point signals
             company +30 | ghost job ±20 | poster +25/-10
             content ±15 | scam +10/-30  | salary -10
A posting is verified at 60+ points with fewer than three warnings.
"""

import asyncio
import logging
from datetime import datetime
from typing import NamedTuple

from config import settings
from models.responses import VerificationResponse
from models.schemas.job import CompanyRecord, JobPosting, PosterAccount
from models.schemas.signal import Finding, SignalResult
from services import prompt_builder
from services.cache import MemoCache
from services.company_lookup import CompanyVerificationAdapter, page_mentions_company
from services.gemini_client import TextInsightAdapter
from services.scoring.aggregator import AdditivePoints
from services.scoring.base import SignalSpec
from services.scoring.classifier import verification_classifier
from services.scoring.engine import ScoringEngine
from services.signals import verification

logger = logging.getLogger(__name__)


class CompanyCheck(NamedTuple):
    exists: bool
    data: CompanyRecord | None = None
    method: str = "none"


class VerificationSubject(NamedTuple):
    posting: JobPosting
    poster: PosterAccount
    company: CompanyCheck
    content: Finding
    checked_at: datetime | None = None  # defaults to now, in the expiry timezone


class CompanyVerifier:
    """Company-existence check with per-name memoization.

    Adapter failures fall through to the next method and are not memoized.
    """

    def __init__(
        self,
        lookup: CompanyVerificationAdapter,
        insights: TextInsightAdapter,
        cache: MemoCache,
    ) -> None:
        self.lookup = lookup
        self.insights = insights
        self.cache = cache

    async def verify(self, company_name: str, company_url: str | None = None) -> CompanyCheck:
        cached = self.cache.get(company_name)
        if cached is not None:
            return cached

        check, conclusive = await self._verify_uncached(company_name, company_url)
        logger.debug("Company %s exists=%s via %s", company_name, check.exists, check.method)
        if conclusive:
            self.cache.set(company_name, check)
        return check

    async def _verify_uncached(self, company_name: str, company_url: str | None) -> tuple[CompanyCheck, bool]:
        if company_url:
            if await self._website_matches(company_url, company_name):
                record = CompanyRecord(name=company_name, website=company_url, verified=True)
                return CompanyCheck(True, record, "website"), True

        try:
            known = await self.lookup.lookup_known_company(company_name)
        except Exception as e:
            logger.warning("Known-company lookup failed for %s: %s", company_name, e)
            known = None
        if known is not None:
            return CompanyCheck(True, known, "registry"), True

        try:
            opinion = await self.insights.generate_json(
                prompt_builder.build_company_legitimacy_prompt(company_name)
            )
        except Exception as e:
            logger.error("AI company verification error: %s", e)
            opinion = None
        if opinion is None:
            return CompanyCheck(False), False

        data = CompanyRecord(name=company_name, verified=False) if opinion.get("legitimate") is True else None
        return CompanyCheck(verification.interpret_company_opinion(opinion), data, "ai"), True

    async def _website_matches(self, url: str, company_name: str) -> bool:
        try:
            html = await self.lookup.fetch_page(url)
            return page_mentions_company(html, company_name)
        except Exception as e:
            logger.warning("Failed to verify company website %s: %s", url, e)
            return False


# ---------------------------------------------------------------------------
# Point signals
# ---------------------------------------------------------------------------

def company_signal(subject: VerificationSubject) -> SignalResult:
    if subject.company.exists:
        return SignalResult(name="company", raw_score=30, contributions=["Company verified"])
    return SignalResult(
        name="company",
        raw_score=0,
        contributions=["Company could not be verified"],
        warnings=["Company verification failed - manual review required"],
    )


def ghost_job_signal(subject: VerificationSubject) -> SignalResult:
    finding = verification.check_for_ghost_job(subject.posting, subject.checked_at)
    if finding.flagged:
        return SignalResult(name="ghost_job", raw_score=-20, warnings=finding.reasons)
    return SignalResult(name="ghost_job", raw_score=20, contributions=["No ghost job indicators found"])


def poster_signal(subject: VerificationSubject) -> SignalResult:
    finding = verification.verify_poster(subject.poster, subject.posting.company)
    if finding.flagged:
        return SignalResult(name="poster", raw_score=-10, warnings=finding.reasons)
    return SignalResult(
        name="poster", raw_score=25, contributions=["Poster verified as legitimate recruiter"]
    )


def content_signal(subject: VerificationSubject) -> SignalResult:
    if subject.content.flagged:
        return SignalResult(name="content", raw_score=-15, warnings=subject.content.reasons)
    return SignalResult(name="content", raw_score=15, contributions=["Job content appears authentic"])


def scam_signal(subject: VerificationSubject) -> SignalResult:
    finding = verification.check_scam_patterns(subject.posting)
    if finding.flagged:
        return SignalResult(name="scam", raw_score=-30, warnings=finding.reasons)
    return SignalResult(name="scam", raw_score=10, contributions=["No scam indicators detected"])


def salary_signal(subject: VerificationSubject) -> SignalResult:
    finding = verification.verify_salary_range(subject.posting)
    if finding.flagged:
        return SignalResult(name="salary", raw_score=-10, warnings=finding.reasons)
    return SignalResult(name="salary", raw_score=0)


class JobVerificationService:
    def __init__(
        self,
        company_lookup: CompanyVerificationAdapter,
        insights: TextInsightAdapter,
        cache: MemoCache | None = None,
    ) -> None:
        self.insights = insights
        self.companies = CompanyVerifier(
            company_lookup,
            insights,
            cache or MemoCache(
                max_entries=settings.memo_cache_max_entries,
                ttl_seconds=settings.memo_cache_ttl_seconds,
            ),
        )
        self.engine = ScoringEngine(
            "job_verification",
            signals=[
                SignalSpec("company", company_signal, domain=(0, 30)),
                SignalSpec("ghost_job", ghost_job_signal, domain=(-20, 20)),
                SignalSpec("poster", poster_signal, domain=(-10, 25)),
                SignalSpec("content", content_signal, domain=(-15, 15)),
                SignalSpec("scam", scam_signal, domain=(-30, 10)),
                SignalSpec("salary", salary_signal, domain=(-10, 0)),
            ],
            aggregator=AdditivePoints(100),
            classifier=verification_classifier(),
        )

    async def analyze_content(self, posting: JobPosting) -> Finding:
        try:
            result = await self.insights.generate_json(
                prompt_builder.build_content_authenticity_prompt(posting)
            )
        except Exception as e:
            logger.error("Content analysis error: %s", e)
            result = None
        return verification.interpret_content_analysis(result)

    async def verify_job_posting(self, posting: JobPosting, poster: PosterAccount) -> VerificationResponse:
        company_url = str(posting.company_url) if posting.company_url else None
        company, content = await asyncio.gather(
            self.companies.verify(posting.company, company_url),
            self.analyze_content(posting),
        )
        subject = VerificationSubject(posting, poster, company, content)
        evaluation = await self.engine.evaluate(subject)

        result = VerificationResponse(
            is_verified=evaluation.decision.positive,
            verification_score=evaluation.composite.value,
            reasons=list(evaluation.decision.reasons),
            warnings=list(evaluation.decision.warnings),
            company_data=company.data,
            breakdown=evaluation.composite.breakdown,
        )
        logger.info(
            "Job posting verification completed: company=%s title=%s verified=%s score=%.0f",
            posting.company, posting.title, result.is_verified, result.verification_score,
        )
        return result
