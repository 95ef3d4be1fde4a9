"""Threshold classifiers. Pure functions of the composite score; cutoffs are inclusive."""

from models.schemas.signal import RiskBand
from services.scoring.base import Classifier, Verdict

MATCH_THRESHOLD = 0.6
REGISTRATION_BOT_THRESHOLD = 60
LOGIN_BOT_THRESHOLD = 50
VERIFIED_THRESHOLD = 60
MAX_VERIFICATION_WARNINGS = 3


def risk_band(score: float) -> RiskBand:
    if score >= 80:
        return RiskBand.CRITICAL
    if score >= 60:
        return RiskBand.HIGH
    if score >= 30:
        return RiskBand.MEDIUM
    return RiskBand.LOW


def trust_score(risk: float) -> float:
    return max(0.0, 1 - risk / 100)


def match_classifier(threshold: float = MATCH_THRESHOLD) -> Classifier:
    def classify(score: float, warning_count: int) -> Verdict:
        is_match = score >= threshold
        return Verdict("Match" if is_match else "NoMatch", is_match)

    return classify


def bot_classifier(threshold: float) -> Classifier:
    def classify(score: float, warning_count: int) -> Verdict:
        is_bot = score >= threshold
        return Verdict("Bot" if is_bot else "NotBot", is_bot, risk_band(score))

    return classify


def verification_classifier(
    threshold: float = VERIFIED_THRESHOLD,
    max_warnings: int = MAX_VERIFICATION_WARNINGS,
) -> Classifier:
    def classify(score: float, warning_count: int) -> Verdict:
        verified = score >= threshold and warning_count < max_warnings
        return Verdict("Verified" if verified else "Unverified", verified)

    return classify
