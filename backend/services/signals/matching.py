"""Candidate/job matching extractors.

Every category score lies in [0, 1]. Absent optional requirements are
score-neutral (full credit).
"""

from typing import NamedTuple

from models.schemas.job import (
    EducationRequirement,
    ExperienceRange,
    JobRequirements,
    RequiredSkill,
    SalaryRange,
)
from models.schemas.profile import CandidateProfile, CandidateSkill, Education, JobPreferences
from models.schemas.signal import SignalResult

# Education level ordinal mapping
EDUCATION_LEVELS = {
    "high_school": 1,
    "associate": 2,
    "bachelor": 3,
    "master": 4,
    "phd": 5,
}

_EDUCATION_ALIASES = {
    "bachelors": "bachelor",
    "masters": "master",
    "doctorate": "phd",
    "highschool": "high_school",
}

REQUIRED_SKILL_WEIGHT = 2
OPTIONAL_SKILL_WEIGHT = 1
VERIFIED_BONUS = 1.2
UNMATCHED_OPTIONAL_CREDIT = 0.3
SHORTFALL_FACTOR = 0.8
OVERQUALIFIED_RATIO = 1.5
OVERQUALIFIED_SCORE = 0.7


class MatchSubject(NamedTuple):
    profile: CandidateProfile
    requirements: JobRequirements


def _find_skill(candidate_skills: list[CandidateSkill], name: str) -> CandidateSkill | None:
    wanted = name.lower()
    for skill in candidate_skills:
        if skill.name.lower() == wanted:
            return skill
    return None


def skills_match(candidate_skills: list[CandidateSkill], required_skills: list[RequiredSkill]) -> float:
    """Weighted skill coverage: required skills count double, verified skills get a bonus."""
    if not required_skills:
        return 1.0

    match_score = 0.0
    total_weight = 0
    for required in required_skills:
        weight = REQUIRED_SKILL_WEIGHT if required.required else OPTIONAL_SKILL_WEIGHT
        total_weight += weight

        candidate = _find_skill(candidate_skills, required.name)
        if candidate is not None:
            level_match = min(candidate.level / required.level, 1) if required.level else 1
            bonus = VERIFIED_BONUS if candidate.verified else 1
            match_score += weight * level_match * bonus
        elif not required.required:
            match_score += weight * UNMATCHED_OPTIONAL_CREDIT

    return min(match_score / total_weight, 1.0)


def experience_match(total_years: float, requirement: ExperienceRange) -> float:
    if total_years < requirement.min:
        return max(0.0, total_years / requirement.min * SHORTFALL_FACTOR)
    if requirement.max and total_years > requirement.max * OVERQUALIFIED_RATIO:
        return OVERQUALIFIED_SCORE
    return 1.0


def normalize_degree(degree: str) -> str:
    key = degree.strip().lower().replace("-", "_").replace(" ", "_").replace("'", "")
    return _EDUCATION_ALIASES.get(key, key)


def education_match(education: list[Education], requirement: EducationRequirement) -> float:
    if not requirement.level:
        return 1.0

    candidate_level = max(
        (EDUCATION_LEVELS.get(normalize_degree(e.degree), 0) for e in education),
        default=0,
    )
    required_level = EDUCATION_LEVELS[requirement.level]

    if candidate_level >= required_level:
        return 1.0
    return candidate_level / required_level * SHORTFALL_FACTOR


def location_match(preferences: JobPreferences, requirements: JobRequirements) -> float:
    if requirements.remote and preferences.remote:
        return 1.0
    if not requirements.location:
        return 1.0

    wanted = requirements.location.lower()
    if any(wanted in loc.lower() for loc in preferences.locations):
        return 1.0
    return 0.3


def salary_match(preferences: JobPreferences, salary: SalaryRange | None) -> float:
    if salary is None or not preferences.salary_min:
        return 1.0
    if salary.max and preferences.salary_min <= salary.max:
        return 1.0
    if salary.min and preferences.salary_min > salary.min * 1.2:
        return 0.5
    return 0.8


def missing_required_skills(profile: CandidateProfile, requirements: JobRequirements) -> list[str]:
    return [
        req.name
        for req in requirements.required_skills
        if req.required and _find_skill(profile.skills, req.name) is None
    ]


def experience_shortfall(profile: CandidateProfile, requirements: JobRequirements) -> float:
    return max(0.0, requirements.experience_years.min - profile.total_years)


# ---------------------------------------------------------------------------
# Signal adapters
# ---------------------------------------------------------------------------

def skills_signal(subject: MatchSubject) -> SignalResult:
    profile, requirements = subject
    score = skills_match(profile.skills, requirements.required_skills)
    matched = [
        r.name for r in requirements.required_skills
        if _find_skill(profile.skills, r.name) is not None
    ]
    contributions = []
    if matched:
        contributions.append(
            f"Matched {len(matched)} of {len(requirements.required_skills)} listed skills: "
            f"{', '.join(matched[:5])}"
        )
    return SignalResult(name="skills", raw_score=score, contributions=contributions)


def experience_signal(subject: MatchSubject) -> SignalResult:
    profile, requirements = subject
    years = profile.total_years
    score = experience_match(years, requirements.experience_years)
    contributions = []
    if score == 1.0 and requirements.experience_years.min > 0:
        contributions.append(
            f"{years:g} years of experience meets the {requirements.experience_years.min:g}+ year requirement"
        )
    elif score == OVERQUALIFIED_SCORE and years >= requirements.experience_years.min:
        contributions.append(f"{years:g} years of experience exceeds the stated range")
    return SignalResult(name="experience", raw_score=score, contributions=contributions)


def education_signal(subject: MatchSubject) -> SignalResult:
    profile, requirements = subject
    score = education_match(profile.education, requirements.education)
    contributions = []
    if requirements.education.level and score == 1.0:
        contributions.append(f"Education meets the {requirements.education.level} requirement")
    return SignalResult(name="education", raw_score=score, contributions=contributions)


def location_signal(subject: MatchSubject) -> SignalResult:
    profile, requirements = subject
    score = location_match(profile.preferences, requirements)
    contributions = []
    if requirements.remote and profile.preferences.remote:
        contributions.append("Remote work preference matches")
    elif requirements.location and score == 1.0:
        contributions.append(f"Preferred location includes {requirements.location}")
    return SignalResult(name="location", raw_score=score, contributions=contributions)


def salary_signal(subject: MatchSubject) -> SignalResult:
    profile, requirements = subject
    score = salary_match(profile.preferences, requirements.salary)
    contributions = []
    if requirements.salary is not None and profile.preferences.salary_min and score == 1.0:
        contributions.append("Salary expectation fits the offered range")
    return SignalResult(name="salary", raw_score=score, contributions=contributions)
