"""Embedding adapter (JobBERT-v2) and TF-IDF fallback similarity for job matching."""

import asyncio
import logging
from typing import Protocol, Sequence

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from config import settings
from services.errors import EnrichmentError

logger = logging.getLogger(__name__)

# Lazy-loaded sentence-transformers model (loaded on first use, ~425MB)
_sbert_model = None


class EmbeddingAdapter(Protocol):
    async def embed(self, text: str) -> list[float]: ...


def _get_sbert_model():
    """Load the embedding model lazily on first call."""
    global _sbert_model
    if _sbert_model is None:
        try:
            from sentence_transformers import SentenceTransformer

            _sbert_model = SentenceTransformer(settings.embedding_model)
            logger.info("Embedding model %s loaded successfully", settings.embedding_model)
        except Exception as e:
            logger.warning("Failed to load embedding model: %s", e)
    return _sbert_model


class SentenceTransformerEmbedder:
    """Embedding adapter running the local sentence-transformers model off the event loop."""

    def __init__(self, model=None) -> None:
        self._model = model

    def _encode(self, text: str) -> list[float]:
        model = self._model or _get_sbert_model()
        if model is None:
            raise EnrichmentError("Embedding model unavailable")
        vector = model.encode([text], convert_to_numpy=True)[0]
        return [float(x) for x in vector]

    async def embed(self, text: str) -> list[float]:
        if not text.strip():
            raise EnrichmentError("Cannot embed empty text")
        try:
            return await asyncio.to_thread(self._encode, text)
        except EnrichmentError:
            raise
        except Exception as e:
            raise EnrichmentError(f"Embedding failed: {e}") from e


def vector_cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity between two embedding vectors, 0.0 for degenerate input."""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    if va.shape != vb.shape or va.size == 0:
        return 0.0
    norm = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if norm == 0.0:
        return 0.0
    return float(np.dot(va, vb) / norm)


def tfidf_cosine_similarity(text_a: str, text_b: str) -> float:
    """Compute cosine similarity between two texts using TF-IDF vectors."""
    if not text_a.strip() or not text_b.strip():
        return 0.0

    vectorizer = TfidfVectorizer(
        stop_words="english",
        max_features=5000,
        sublinear_tf=True,
        ngram_range=(1, 2),
    )
    try:
        tfidf_matrix = vectorizer.fit_transform([text_a, text_b])
        score = sklearn_cosine(tfidf_matrix[0:1], tfidf_matrix[1:2])[0][0]
        return float(score)
    except ValueError:
        return 0.0
