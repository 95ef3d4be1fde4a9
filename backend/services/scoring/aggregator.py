"""Composite score strategies: weighted average and additive points."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from models.schemas.signal import CompositeScore, SignalResult
from services.errors import ScoringConfigError
from services.scoring.base import Aggregator, clamp

logger = logging.getLogger(__name__)


def round_half_up(value: float, ndigits: int) -> float:
    """Round exact halves away from zero (0.625 -> 0.63); built-in round() goes to even."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class WeightedAverage(Aggregator):
    """``Σ weight_i × score_i`` over unit-interval signals, rounded half-up.

    Used by match engines. The weight table is fixed per engine and must
    cover every configured signal.
    """

    def __init__(self, weights: Mapping[str, float], limit: float = 1.0, ndigits: int = 2) -> None:
        if any(w < 0 for w in weights.values()):
            raise ScoringConfigError("Weights must be non-negative")
        self.weights = dict(weights)
        self.limit = limit
        self.ndigits = ndigits

    def weight_for(self, name: str) -> float:
        try:
            return self.weights[name]
        except KeyError:
            raise ScoringConfigError(f"No weight configured for signal '{name}'") from None

    def combine(self, signals: list[SignalResult]) -> CompositeScore:
        contributing = [s for s in signals if s.weight != 0]
        total = sum(s.weight * s.raw_score for s in contributing)
        value = round_half_up(clamp(total, 0.0, self.limit), self.ndigits)
        return CompositeScore(
            value=value,
            breakdown={s.name: s.raw_score for s in contributing},
            raw_total=total,
        )


class AdditivePoints(Aggregator):
    """Sum of fixed point deltas, clamped into ``[0, limit]``.

    Used by risk engines; each triggered heuristic adds or subtracts points.
    The clamped value is not rounded.
    """

    def __init__(self, limit: float = 100.0) -> None:
        self.limit = limit

    def weight_for(self, name: str) -> float:
        return 1.0

    def combine(self, signals: list[SignalResult]) -> CompositeScore:
        contributing = [s for s in signals if s.weight != 0]
        total = sum(s.raw_score for s in contributing)
        value = max(0.0, min(self.limit, total))
        if value != total:
            logger.debug("Risk accumulation %.1f clamped to %.1f", total, value)
        return CompositeScore(
            value=value,
            breakdown={s.name: s.raw_score for s in contributing},
            raw_total=total,
        )
