"""Candidate profile records consumed by the matching engine."""

from pydantic import BaseModel, Field


class CandidateSkill(BaseModel):
    name: str = Field(..., min_length=1)
    level: int = Field(..., ge=1, le=5)
    verified: bool = False


class WorkExperience(BaseModel):
    title: str
    company: str
    duration: float = Field(..., ge=0)  # years
    description: str | None = None


class Education(BaseModel):
    degree: str  # high_school, associate, bachelor, master, phd
    field: str = ""
    school: str = ""


class JobPreferences(BaseModel):
    job_types: list[str] = []
    locations: list[str] = []
    remote: bool = False
    salary_min: float | None = Field(default=None, ge=0)
    industries: list[str] = []


class CandidateProfile(BaseModel):
    user_id: str
    skills: list[CandidateSkill] = []
    experience: list[WorkExperience] = []
    education: list[Education] = []
    preferences: JobPreferences = JobPreferences()

    @property
    def total_years(self) -> float:
        return sum(exp.duration for exp in self.experience)
