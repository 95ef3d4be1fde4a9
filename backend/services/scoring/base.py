"""Building blocks shared by every scoring engine.

A ``SignalSpec`` binds a signal name to an extractor. Extractors receive the
engine's subject (a validated record or a tuple of records) and return a
``SignalResult``; they may be plain functions or coroutines.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from models.schemas.signal import CompositeScore, Finding, SignalResult

Extractor = Callable[[Any], SignalResult | Awaitable[SignalResult]]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class SignalSpec:
    name: str
    extract: Extractor
    domain: tuple[float, float] = (0.0, 1.0)

    async def run(self, subject: Any, weight: float) -> SignalResult:
        result = self.extract(subject)
        if inspect.isawaitable(result):
            result = await result
        low, high = self.domain
        return result.model_copy(update={
            "name": self.name,
            "weight": weight,
            "raw_score": clamp(result.raw_score, low, high),
        })


@dataclass(frozen=True)
class Verdict:
    """Classifier output, before reasons/warnings are attached."""
    classification: str
    positive: bool
    risk_band: Any = None


Classifier = Callable[[float, int], Verdict]


class Aggregator(ABC):
    """Combines per-signal scores into one composite score."""

    @abstractmethod
    def weight_for(self, name: str) -> float:
        """Weight applied to the named signal. Raises ScoringConfigError if unknown."""

    @abstractmethod
    def combine(self, signals: list[SignalResult]) -> CompositeScore:
        """Aggregate already-clamped signals."""


def finding_signal(name: str, finding: Finding, as_warnings: bool = False) -> SignalResult:
    """Wrap a heuristic finding as a points signal."""
    if as_warnings:
        return SignalResult(name=name, raw_score=finding.score, warnings=list(finding.reasons))
    return SignalResult(name=name, raw_score=finding.score, contributions=list(finding.reasons))
