"""Lazy-loading engine registry.

Global singletons created on first use with adapters built from settings.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

_registry: dict[str, Any] = {}


def _create_engine(name: str) -> Any:
    """Factory: create an engine service by name with deferred imports."""
    if name == "matching":
        from services.gemini_client import GeminiInsightAdapter
        from services.matching_engine import MatchingEngine
        from services.similarity import SentenceTransformerEmbedder
        return MatchingEngine(SentenceTransformerEmbedder(), GeminiInsightAdapter())
    elif name == "bot_detection":
        from services.bot_detection import BotDetectionService
        return BotDetectionService()
    elif name == "job_verification":
        from services.company_lookup import HttpCompanyLookup
        from services.gemini_client import GeminiInsightAdapter
        from services.job_verification import JobVerificationService
        return JobVerificationService(HttpCompanyLookup(), GeminiInsightAdapter())
    else:
        raise ValueError(f"Unknown engine: {name}")


def get_engine(name: str) -> Any:
    """Get an engine by name, creating it on first access."""
    if name not in _registry:
        logger.info("Creating engine: %s", name)
        _registry[name] = _create_engine(name)
    return _registry[name]


def preload(*names: str) -> None:
    """Pre-create multiple engines (e.g. at startup)."""
    for name in names:
        get_engine(name)


def clear() -> None:
    """Drop all engines and their caches. Useful for testing."""
    _registry.clear()
