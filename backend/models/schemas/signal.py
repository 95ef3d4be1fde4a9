"""Engine-level contracts shared by all three scoring engines."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RiskBand(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Finding(BaseModel):
    """Sub-result bundle returned by a single heuristic check.

    ``flagged`` is True when the check found a problem (risky attempt,
    ghost-job posting, illegitimate poster, ...).
    """
    flagged: bool = False
    score: float = 0.0
    reasons: list[str] = []


class SignalResult(BaseModel):
    """One named sub-score, already clamped to its documented domain."""
    name: str
    raw_score: float
    weight: float = 1.0
    contributions: list[str] = []  # reasons/justifications surfaced to the caller
    warnings: list[str] = []  # negative findings


class CompositeScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float  # [0, 1] for match engines, [0, 100] for risk engines
    breakdown: dict[str, float] = {}
    raw_total: float = 0.0  # unclamped accumulation, for logging


class Decision(BaseModel):
    """Immutable per-invocation decision. Never persisted by the engine."""
    model_config = ConfigDict(frozen=True)

    classification: str
    positive: bool
    risk_band: RiskBand | None = None  # bot/fraud engines only
    reasons: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class Evaluation(BaseModel):
    """Full explainability bundle produced by one engine run."""
    engine: str
    composite: CompositeScore
    decision: Decision
    signals: list[SignalResult] = []
    strengths: list[str] = []

    def signal(self, name: str) -> SignalResult | None:
        for s in self.signals:
            if s.name == name:
                return s
        return None
