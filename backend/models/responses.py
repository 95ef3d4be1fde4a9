from pydantic import BaseModel

from models.schemas.job import CompanyRecord
from models.schemas.signal import RiskBand


class MatchScoreResponse(BaseModel):
    overall: float = 0.0  # 0-1, rounded to 2 dp
    is_match: bool = False
    breakdown: dict[str, float] = {}
    insights: list[str] = []
    reasons: list[str] = []
    strengths: list[str] = []
    gaps: list[str] = []


class RankedMatch(BaseModel):
    job_id: str
    score: float
    similarity: float = 0.0  # embedding similarity used for shortlisting
    reasons: list[str] = []
    strengths: list[str] = []
    gaps: list[str] = []


class MatchRankResponse(BaseModel):
    matches: list[RankedMatch] = []


class BotAnalysisResponse(BaseModel):
    is_bot: bool = False
    trust_score: float = 1.0
    risk_score: float = 0.0
    risk_level: RiskBand = RiskBand.LOW
    reasons: list[str] = []


class VerificationResponse(BaseModel):
    is_verified: bool = False
    verification_score: float = 0.0
    reasons: list[str] = []
    warnings: list[str] = []
    company_data: CompanyRecord | None = None
    breakdown: dict[str, float] = {}
