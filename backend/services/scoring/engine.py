"""Generic signal scoring engine.

Flow:
    subject
      ├─ SignalSpec.run() per configured signal   → SignalResult (clamped)
      ├─ Aggregator.combine(signals)              → CompositeScore
      ├─ Classifier(composite, warning count)     → Verdict
      └─ explain.build_evaluation(...)            → Evaluation

The three use cases (matching, bot detection, job verification) are
instances of this engine with different signals, aggregators and
classifiers.
"""

import logging
from typing import Any, Sequence

from models.schemas.signal import Evaluation, SignalResult
from services.errors import EvaluationError, ScoringError
from services.scoring import explain
from services.scoring.base import Aggregator, Classifier, SignalSpec

logger = logging.getLogger(__name__)


class ScoringEngine:
    def __init__(
        self,
        name: str,
        signals: Sequence[SignalSpec],
        aggregator: Aggregator,
        classifier: Classifier,
        report_strengths: bool = False,
    ) -> None:
        self.name = name
        self.signals = list(signals)
        self.aggregator = aggregator
        self.classifier = classifier
        self.report_strengths = report_strengths
        # Resolve weights up front so a misconfigured table fails at construction.
        self._weights = {spec.name: aggregator.weight_for(spec.name) for spec in self.signals}

    async def extract(self, subject: Any) -> list[SignalResult]:
        results: list[SignalResult] = []
        for spec in self.signals:
            weight = self._weights[spec.name]
            if weight == 0:
                continue
            results.append(await spec.run(subject, weight))
        return results

    async def evaluate(self, subject: Any) -> Evaluation:
        try:
            signals = await self.extract(subject)
            composite = self.aggregator.combine(signals)
            reasons, warnings = explain.collect_findings(signals)
            verdict = self.classifier(composite.value, len(warnings))
        except ScoringError:
            raise
        except Exception as e:
            logger.exception("%s engine failed", self.name)
            raise EvaluationError(self.name, e) from e

        logger.debug(
            "%s: composite=%.2f classification=%s",
            self.name, composite.value, verdict.classification,
        )
        return explain.build_evaluation(
            self.name,
            composite,
            verdict,
            signals,
            reasons,
            warnings,
            report_strengths=self.report_strengths,
        )
