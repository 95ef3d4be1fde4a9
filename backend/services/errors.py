"""Error taxonomy for the scoring engines.

Input validation failures are pydantic ``ValidationError`` raised at the
boundary and never reach these classes.
"""


class ScoringError(Exception):
    """Base class: an evaluation could not be completed."""


class EnrichmentError(ScoringError):
    """An external enrichment adapter (embedding, text, fetch) failed."""


class ScoringConfigError(ScoringError):
    """Engine configuration is inconsistent, e.g. a weight table entry is missing."""


class EvaluationError(ScoringError):
    """Unexpected failure while running an evaluation."""

    def __init__(self, engine: str, cause: BaseException) -> None:
        super().__init__(f"{engine} evaluation failed: {cause}")
        self.engine = engine
        self.cause = cause
