"""All prompt templates for Gemini API calls."""

from models.schemas.job import JobPosting, JobRequirements
from models.schemas.profile import CandidateProfile


def build_match_insights_prompt(
    profile: CandidateProfile,
    requirements: JobRequirements,
    scores: dict[str, float],
) -> str:
    """Short, actionable commentary on a computed match."""
    skills = ", ".join(s.name for s in profile.skills) or "none listed"
    degrees = ", ".join(e.degree for e in profile.education) or "none listed"
    required = ", ".join(s.name for s in requirements.required_skills) or "none listed"
    score_lines = "\n".join(f"- {name}: {value:.2f}" for name, value in scores.items())

    return f"""Analyze this job match and provide 2-3 concise insights, one per line.

Candidate Profile:
- Skills: {skills}
- Experience: {len(profile.experience)} roles
- Education: {degrees}

Job Requirements:
- Title: {requirements.title}
- Required Skills: {required}
- Experience: {requirements.experience_years.min:g}+ years

Match Scores:
{score_lines}

Provide actionable insights about this match.
"""


def build_company_legitimacy_prompt(company_name: str) -> str:
    return f"""Is "{company_name}" a legitimate company? Consider:
1. Is this a known company name?
2. Does it sound like a real company?
3. Are there any obvious red flags?

Respond with ONLY valid JSON (no markdown, no code fences):
{{"legitimate": true/false, "confidence": <number 0-1>, "reason": "<brief explanation>"}}
"""


def build_content_authenticity_prompt(job: JobPosting) -> str:
    return f"""Analyze this job posting for authenticity:
Title: {job.title}
Company: {job.company}
Description: {job.description[:500]}

Check for:
1. AI-generated or template content
2. Inconsistencies
3. Professionalism
4. Specific vs generic language

Respond with ONLY valid JSON (no markdown, no code fences):
{{"authentic": true/false, "issues": ["issue1", "issue2"], "score": <integer 0-100>}}
"""
