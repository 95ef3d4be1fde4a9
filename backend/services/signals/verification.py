"""Job-posting authenticity heuristics.

Checks return ``Finding`` objects whose ``reasons`` become warnings when the
check is flagged. Point deltas are applied by ``services.job_verification``.
"""

import re
from datetime import datetime

from models.schemas.job import JobPosting, PosterAccount
from models.schemas.signal import Finding

GENERIC_PHRASES = [
    "rockstar", "ninja", "guru", "wizard",
    "competitive salary", "great benefits",
    "fast-paced environment", "wear many hats",
]

SCAM_PHRASES = [
    "no experience necessary",
    "make money from home",
    "unlimited earning potential",
    "be your own boss",
    "work from anywhere",
    "passive income",
    "get rich",
    "mlm", "multi-level marketing",
    "upfront payment",
    "processing fee",
    "training fee",
]

PERSONAL_EMAIL_DOMAINS = {"gmail.com", "yahoo.com", "hotmail.com", "outlook.com"}
POSTER_EXEMPT_DOMAINS = {"gmail.com", "outlook.com"}

# Annual salary bands by minimum required experience
MARKET_RATES = {
    "entry": (40_000, 80_000),
    "mid": (70_000, 130_000),
    "senior": (120_000, 250_000),
}

MIN_REQUIREMENTS_LENGTH = 50
MAX_POSTING_DAYS = 90
GHOST_JOB_MIN_INDICATORS = 2
MAX_POSTER_WARNINGS = 2


def _email_domain(email: str) -> str:
    return email.rpartition("@")[2].lower()


def experience_band(experience_min: float) -> str:
    if experience_min < 2:
        return "entry"
    if experience_min < 5:
        return "mid"
    return "senior"


def check_for_ghost_job(job: JobPosting, now: datetime | None = None) -> Finding:
    indicators: list[str] = []

    if not job.requirements or len(job.requirements) < MIN_REQUIREMENTS_LENGTH:
        indicators.append("Vague or missing job requirements")

    if job.experience_min == 0 and job.salary_max and job.salary_max > 200_000:
        indicators.append("Unrealistic salary for entry-level position")

    description = job.description.lower()
    generic_count = sum(1 for phrase in GENERIC_PHRASES if phrase in description)
    if generic_count >= 3:
        indicators.append("Excessive use of generic phrases")

    if not job.contact_email and not job.company_url:
        indicators.append("No contact information provided")

    if job.expires_at:
        now = now or datetime.now(job.expires_at.tzinfo)
        if (job.expires_at - now).days > MAX_POSTING_DAYS:
            indicators.append("Unusually long posting duration")

    return Finding(
        flagged=len(indicators) >= GHOST_JOB_MIN_INDICATORS,
        score=len(indicators),
        reasons=indicators,
    )


def verify_poster(poster: PosterAccount, company_name: str) -> Finding:
    """Flagged (not legitimate) once two or more warnings accumulate."""
    warnings: list[str] = []

    if poster.verification_status != "VERIFIED":
        warnings.append("Poster email not verified")

    if poster.trust_score < 0.5:
        warnings.append("Low poster trust score")

    if poster.role == "JOB_SEEKER":
        warnings.append("Job posted by non-recruiter account")

    recent = poster.recent_posting_companies
    if len(recent) > 5 and len(set(recent)) > 3:
        warnings.append("User posting for multiple unrelated companies")

    if company_name:
        domain = _email_domain(poster.email)
        company_domain = re.sub(r"\s+", "", company_name.lower())
        if company_domain not in domain and domain not in POSTER_EXEMPT_DOMAINS:
            warnings.append("Email domain does not match company")

    return Finding(
        flagged=len(warnings) >= MAX_POSTER_WARNINGS,
        score=len(warnings),
        reasons=warnings,
    )


def check_scam_patterns(job: JobPosting) -> Finding:
    indicators: list[str] = []
    description = job.description.lower()

    for phrase in SCAM_PHRASES:
        if phrase in description:
            indicators.append(f'Scam phrase detected: "{phrase}"')

    if job.salary_min and job.experience_min == 0 and job.salary_min > 100_000:
        indicators.append("Unrealistic salary for entry-level position")

    if not job.company or len(job.company) < 3:
        indicators.append("Missing or invalid company name")

    if job.contact_email and _email_domain(job.contact_email) in PERSONAL_EMAIL_DOMAINS:
        indicators.append("Personal email address used for business")

    return Finding(flagged=bool(indicators), score=len(indicators), reasons=indicators)


def verify_salary_range(job: JobPosting) -> Finding:
    issues: list[str] = []

    if job.salary_min and job.salary_max:
        if job.salary_max < job.salary_min:
            issues.append("Maximum salary less than minimum")

        if job.salary_max > job.salary_min * 3:
            issues.append("Salary range too wide")

        market_min, market_max = MARKET_RATES[experience_band(job.experience_min)]

        if job.salary_min < market_min * 0.5:
            issues.append("Salary significantly below market rate")

        if job.salary_max > market_max * 2:
            issues.append("Salary significantly above market rate")

    return Finding(flagged=bool(issues), score=len(issues), reasons=issues)


def interpret_content_analysis(result: dict | None) -> Finding:
    """Map the text model's JSON verdict to a finding; no verdict is neutral."""
    if result is None:
        return Finding()

    authentic = result.get("authentic") is True
    try:
        score = float(result.get("score", 0))
    except (TypeError, ValueError):
        score = 0.0

    issues: list[str] = []
    if not authentic:
        raw_issues = result.get("issues")
        if isinstance(raw_issues, list) and raw_issues:
            issues = [str(i) for i in raw_issues]
        else:
            issues = ["Content appears inauthentic"]

    return Finding(flagged=not (authentic and score > 70), score=score, reasons=issues)


def interpret_company_opinion(result: dict | None) -> bool:
    """Legitimate only with confidence above 0.7."""
    if not result:
        return False
    try:
        confidence = float(result.get("confidence", 0))
    except (TypeError, ValueError):
        confidence = 0.0
    return result.get("legitimate") is True and confidence > 0.7
