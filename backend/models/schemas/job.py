"""Job-side records: matching requirements, postings under verification, posters."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

EducationLevel = Literal["high_school", "associate", "bachelor", "master", "phd"]


class RequiredSkill(BaseModel):
    name: str = Field(..., min_length=1)
    level: int | None = Field(default=None, ge=1, le=5)
    required: bool = False


class ExperienceRange(BaseModel):
    min: float = Field(default=0, ge=0)
    max: float | None = Field(default=None, gt=0)


class EducationRequirement(BaseModel):
    level: EducationLevel | None = None
    fields: list[str] | None = None


class SalaryRange(BaseModel):
    min: float | None = Field(default=None, ge=0)
    max: float | None = Field(default=None, ge=0)
    currency: str = "USD"


class JobRequirements(BaseModel):
    title: str
    required_skills: list[RequiredSkill] = []
    experience_years: ExperienceRange = ExperienceRange()
    education: EducationRequirement = EducationRequirement()
    location: str | None = None
    remote: bool = False
    salary: SalaryRange | None = None


class JobListing(BaseModel):
    """A job available for ranking against a candidate."""
    job_id: str
    requirements: JobRequirements
    description: str = ""

    def embedding_text(self) -> str:
        req = self.requirements
        skills = ", ".join(s.name for s in req.required_skills)
        parts = [req.title, f"Skills: {skills}", f"Location: {req.location or 'any'}"]
        if req.remote:
            parts.append("Remote")
        if self.description:
            parts.append(self.description)
        return "\n".join(parts)


class JobPosting(BaseModel):
    """A posting submitted for authenticity verification."""
    title: str = Field(..., min_length=3, max_length=100)
    company: str = Field(..., min_length=2, max_length=100)
    company_url: HttpUrl | None = None
    location: str | None = None
    remote: bool = False
    hybrid: bool | None = None
    description: str = Field(..., min_length=100, max_length=10000)
    requirements: str | None = None
    responsibilities: str | None = None
    benefits: str | None = None
    salary_min: float | None = Field(default=None, gt=0)
    salary_max: float | None = Field(default=None, gt=0)
    salary_currency: str = "USD"
    experience_min: float = Field(default=0, ge=0)
    experience_max: float | None = Field(default=None, gt=0)
    contact_email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    expires_at: datetime | None = None


class PosterAccount(BaseModel):
    """Snapshot of the posting account, loaded by the caller."""
    user_id: str
    email: str = Field(..., pattern=EMAIL_PATTERN)
    verification_status: Literal["VERIFIED", "UNVERIFIED", "PENDING"] = "UNVERIFIED"
    trust_score: float = Field(default=1.0, ge=0, le=1)
    role: Literal["JOB_SEEKER", "RECRUITER", "EMPLOYER"] = "RECRUITER"
    recent_posting_companies: list[str] = Field(default=[], max_length=10)  # newest first


class CompanyRecord(BaseModel):
    name: str
    website: str | None = None
    industry: str | None = None
    size: str | None = None
    verified: bool = False
