"""Deterministic stand-ins for the embedding, text-insight and company adapters."""

from models.schemas.job import CompanyRecord
from services.errors import EnrichmentError

LEGIT_DESCRIPTION = (
    "We are hiring a backend engineer to build and operate our payments APIs. "
    "You will design PostgreSQL schemas, write Python services and own on-call "
    "rotations with a team of six engineers."
)


class FakeEmbedder:
    """Returns the vector of the first marker found in the text."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, fail_on: tuple[str, ...] = ()):
        self.vectors = vectors or {}
        self.fail_on = fail_on
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        for marker in self.fail_on:
            if marker in text:
                raise EnrichmentError(f"embedding unavailable for {marker}")
        for marker, vector in self.vectors.items():
            if marker in text:
                return vector
        return [1.0, 0.0, 0.0]


class FakeInsights:
    """Canned insights; ``json_results`` maps a prompt substring to a JSON answer."""

    def __init__(self, insights=None, json_results=None, raises: Exception | None = None):
        self.insights = insights or ["Strong skills overlap"]
        self.json_results = dict(json_results or {})
        self.raises = raises
        self.prompts: list[str] = []

    async def generate_insights(self, prompt: str) -> list[str]:
        self.prompts.append(prompt)
        if self.raises:
            raise self.raises
        return self.insights

    async def generate_json(self, prompt: str) -> dict | None:
        self.prompts.append(prompt)
        if self.raises:
            raise self.raises
        for key, result in self.json_results.items():
            if key in prompt:
                return result
        return None


class FakeCompanyLookup:
    def __init__(self, pages: dict[str, str] | None = None, known: set[str] | None = None):
        self.pages = pages or {}
        self.known = known or set()
        self.fetches: list[str] = []
        self.lookups: list[str] = []

    async def fetch_page(self, url: str) -> str:
        self.fetches.append(url)
        if url not in self.pages:
            raise EnrichmentError(f"Failed to fetch {url}")
        return self.pages[url]

    async def lookup_known_company(self, name: str) -> CompanyRecord | None:
        self.lookups.append(name)
        if name in self.known:
            return CompanyRecord(name=name, industry="Technology", verified=True)
        return None
