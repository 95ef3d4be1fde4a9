from pydantic import BaseModel, Field

from models.schemas.job import JobListing, JobPosting, JobRequirements, PosterAccount
from models.schemas.profile import CandidateProfile


class MatchScoreRequest(BaseModel):
    candidate_profile: CandidateProfile
    job_requirements: JobRequirements


class MatchRankRequest(BaseModel):
    candidate_profile: CandidateProfile
    listings: list[JobListing] = Field(..., max_length=200, description="Jobs to rank for the candidate")


class VerificationRequest(BaseModel):
    posting: JobPosting
    poster: PosterAccount
