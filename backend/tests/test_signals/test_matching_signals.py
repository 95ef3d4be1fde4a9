"""Tests for candidate/job matching extractors."""

import pytest

from models.schemas.job import (
    EducationRequirement,
    ExperienceRange,
    JobRequirements,
    RequiredSkill,
    SalaryRange,
)
from models.schemas.profile import CandidateProfile, CandidateSkill, Education, JobPreferences
from services.signals import matching
from services.signals.matching import MatchSubject


class TestSkillsMatch:
    def test_no_required_skills_is_full_credit(self):
        assert matching.skills_match([], []) == 1.0

    def test_case_insensitive_match_at_level(self):
        candidate = [CandidateSkill(name="sql", level=4)]
        required = [RequiredSkill(name="SQL", level=3, required=True)]
        assert matching.skills_match(candidate, required) == 1.0

    def test_level_shortfall_is_proportional(self):
        candidate = [CandidateSkill(name="Python", level=2)]
        required = [RequiredSkill(name="Python", level=4, required=True)]
        assert matching.skills_match(candidate, required) == pytest.approx(0.5)

    def test_verified_bonus_is_capped(self):
        candidate = [CandidateSkill(name="Python", level=5, verified=True)]
        required = [RequiredSkill(name="Python", required=True)]
        assert matching.skills_match(candidate, required) == 1.0

    def test_missing_optional_gets_partial_credit(self):
        required = [RequiredSkill(name="Go", required=False)]
        assert matching.skills_match([], required) == pytest.approx(0.3)

    def test_missing_required_gets_nothing(self):
        required = [
            RequiredSkill(name="Python", required=True),
            RequiredSkill(name="Go", required=False),
        ]
        candidate = [CandidateSkill(name="Python", level=3)]
        # (2 * 1 + 1 * 0.3) / 3
        assert matching.skills_match(candidate, required) == pytest.approx(2.3 / 3)


class TestExperienceMatch:
    def test_shortfall(self):
        assert matching.experience_match(1, ExperienceRange(min=2)) == pytest.approx(0.4)

    def test_within_range(self):
        assert matching.experience_match(3, ExperienceRange(min=2, max=5)) == 1.0

    def test_overqualified(self):
        assert matching.experience_match(8, ExperienceRange(min=2, max=5)) == 0.7

    def test_no_minimum(self):
        assert matching.experience_match(0, ExperienceRange()) == 1.0

    @pytest.mark.parametrize("years", [0, 0.5, 1, 2.5, 4, 7.5, 10, 20])
    def test_stays_in_unit_interval(self, years):
        score = matching.experience_match(years, ExperienceRange(min=3, max=6))
        assert 0.0 <= score <= 1.0


class TestEducationMatch:
    def test_no_requirement(self):
        assert matching.education_match([], EducationRequirement()) == 1.0

    def test_meets_requirement_with_alias(self):
        education = [Education(degree="Masters")]
        assert matching.education_match(education, EducationRequirement(level="bachelor")) == 1.0

    def test_below_requirement(self):
        education = [Education(degree="bachelor")]
        score = matching.education_match(education, EducationRequirement(level="phd"))
        assert score == pytest.approx(3 / 5 * 0.8)

    def test_unknown_degree_counts_as_zero(self):
        education = [Education(degree="bootcamp")]
        assert matching.education_match(education, EducationRequirement(level="associate")) == 0.0

    def test_normalize_degree(self):
        assert matching.normalize_degree("High School") == "high_school"
        assert matching.normalize_degree("Doctorate") == "phd"
        assert matching.normalize_degree("bachelor's") == "bachelor"


class TestLocationAndSalary:
    def test_remote_on_both_sides(self):
        prefs = JobPreferences(remote=True)
        req = JobRequirements(title="Dev", location="Berlin", remote=True)
        assert matching.location_match(prefs, req) == 1.0

    def test_location_substring(self):
        prefs = JobPreferences(locations=["Berlin, Germany"])
        req = JobRequirements(title="Dev", location="berlin")
        assert matching.location_match(prefs, req) == 1.0

    def test_location_mismatch(self):
        prefs = JobPreferences(locations=["Paris"])
        req = JobRequirements(title="Dev", location="Berlin")
        assert matching.location_match(prefs, req) == 0.3

    def test_salary_tiers(self):
        prefs = JobPreferences(salary_min=100_000)
        assert matching.salary_match(prefs, None) == 1.0
        assert matching.salary_match(prefs, SalaryRange(min=80_000, max=110_000)) == 1.0
        assert matching.salary_match(prefs, SalaryRange(min=60_000, max=90_000)) == 0.5
        assert matching.salary_match(prefs, SalaryRange(min=90_000, max=95_000)) == 0.8

    def test_no_salary_expectation(self):
        assert matching.salary_match(JobPreferences(), SalaryRange(min=1, max=2)) == 1.0


class TestGaps:
    def test_missing_required_skills_and_shortfall(self):
        profile = CandidateProfile(
            user_id="c",
            skills=[CandidateSkill(name="Python", level=3)],
            experience=[{"title": "Dev", "company": "X", "duration": 1.5}],
        )
        req = JobRequirements(
            title="Dev",
            required_skills=[
                RequiredSkill(name="python", required=True),
                RequiredSkill(name="Kubernetes", required=True),
                RequiredSkill(name="Go"),
            ],
            experience_years=ExperienceRange(min=4),
        )
        assert matching.missing_required_skills(profile, req) == ["Kubernetes"]
        assert matching.experience_shortfall(profile, req) == 2.5


class TestSignalAdapters:
    def test_sql_requirement_scores_full_marks(self, sql_profile):
        req = JobRequirements(
            title="Analyst",
            required_skills=[RequiredSkill(name="SQL", level=3, required=True)],
            experience_years=ExperienceRange(min=2),
        )
        subject = MatchSubject(sql_profile, req)
        skills = matching.skills_signal(subject)
        assert skills.raw_score == 1.0
        assert skills.contributions == ["Matched 1 of 1 listed skills: SQL"]
        assert matching.experience_signal(subject).contributions == [
            "3 years of experience meets the 2+ year requirement"
        ]

    def test_remote_contribution(self, sql_profile):
        req = JobRequirements(title="Analyst", remote=True)
        result = matching.location_signal(MatchSubject(sql_profile, req))
        assert result.contributions == ["Remote work preference matches"]


def test_verified_sql_scenario_is_capped_at_one():
    candidate = [CandidateSkill(name="SQL", level=4, verified=True)]
    required = [RequiredSkill(name="SQL", level=3, required=True)]
    # 2 * min(4/3, 1) * 1.2 = 2.4 over weight 2
    assert matching.skills_match(candidate, required) == 1.0


@pytest.mark.parametrize("years,minimum", [(0, 1), (1, 3), (2.9, 3), (3, 3), (4, 3), (12, 3)])
def test_experience_bounds(years, minimum):
    score = matching.experience_match(years, ExperienceRange(min=minimum, max=5))
    if years < minimum:
        assert score == pytest.approx(min(max(years / minimum * 0.8, 0), 0.8))
    else:
        assert score >= 0.7
