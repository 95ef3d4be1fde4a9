"""Typed contracts shared by the extractors, engines and API."""

from models.schemas.signal import (
    CompositeScore,
    Decision,
    Evaluation,
    Finding,
    RiskBand,
    SignalResult,
)
from models.schemas.profile import CandidateProfile
from models.schemas.job import JobListing, JobPosting, JobRequirements, PosterAccount
from models.schemas.attempt import LoginAttempt, RegistrationAttempt

__all__ = [
    "CompositeScore",
    "Decision",
    "Evaluation",
    "Finding",
    "RiskBand",
    "SignalResult",
    "CandidateProfile",
    "JobListing",
    "JobPosting",
    "JobRequirements",
    "PosterAccount",
    "LoginAttempt",
    "RegistrationAttempt",
]
