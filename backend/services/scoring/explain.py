"""Explainability builder: formatting and selection only, no scoring."""

from models.schemas.signal import CompositeScore, Decision, Evaluation, SignalResult
from services.scoring.base import Verdict

STRENGTH_THRESHOLD = 0.8


def collect_findings(signals: list[SignalResult]) -> tuple[list[str], list[str]]:
    """Reasons and warnings in extractor order."""
    reasons: list[str] = []
    warnings: list[str] = []
    for signal in signals:
        reasons.extend(signal.contributions)
        warnings.extend(signal.warnings)
    return reasons, warnings


def identify_strengths(signals: list[SignalResult], threshold: float = STRENGTH_THRESHOLD) -> list[str]:
    return [s.name for s in signals if s.raw_score >= threshold]


def build_evaluation(
    engine: str,
    composite: CompositeScore,
    verdict: Verdict,
    signals: list[SignalResult],
    reasons: list[str],
    warnings: list[str],
    report_strengths: bool = False,
) -> Evaluation:
    decision = Decision(
        classification=verdict.classification,
        positive=verdict.positive,
        risk_band=verdict.risk_band,
        reasons=tuple(reasons),
        warnings=tuple(warnings),
    )
    return Evaluation(
        engine=engine,
        composite=composite,
        decision=decision,
        signals=signals,
        strengths=identify_strengths(signals) if report_strengths else [],
    )


def format_missing_skills(missing: list[str]) -> str | None:
    if not missing:
        return None
    return f"Missing skills: {', '.join(missing)}"


def format_experience_shortfall(years: float) -> str | None:
    if years <= 0:
        return None
    return f"Need {years:g} more years of experience"
