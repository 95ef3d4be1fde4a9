"""Google Gemini API wrapper with error handling.

Backs the Text-Insight adapter used by the matching engine and the AI
opinions (company legitimacy, content authenticity) used by job verification.
Every call is attempted once; failures are logged and reported as ``None``.
"""

import json
import logging
from typing import Protocol

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

INSIGHT_FALLBACK = "Match analysis in progress"

_client: genai.Client | None = None


class TextInsightAdapter(Protocol):
    async def generate_insights(self, prompt: str) -> list[str]: ...

    async def generate_json(self, prompt: str) -> dict | None: ...


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate_text(
    prompt: str,
    temperature: float = 0.7,
    max_output_tokens: int = 512,
) -> str | None:
    """Send a prompt to Gemini and return the raw text response."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            ),
        )
        return (response.text or "").strip()
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None


def _strip_fences(text: str) -> str:
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


async def generate_json(prompt: str, max_output_tokens: int = 256) -> dict | None:
    """Send a prompt to Gemini and parse the JSON response."""
    text = await generate_text(prompt, temperature=0.3, max_output_tokens=max_output_tokens)
    if not text:
        return None

    try:
        parsed = json.loads(_strip_fences(text))
    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini response as JSON: %s", e)
        return None

    if not isinstance(parsed, dict):
        logger.error("Gemini JSON response is not an object: %r", type(parsed))
        return None
    return parsed


def split_insights(text: str) -> list[str]:
    """Split a free-text answer into one insight per non-empty line."""
    lines = []
    for line in text.splitlines():
        line = line.strip().lstrip("-*•").strip()
        if line:
            lines.append(line)
    return lines


class GeminiInsightAdapter:
    """Text-Insight adapter backed by Gemini. Never raises."""

    async def generate_insights(self, prompt: str) -> list[str]:
        text = await generate_text(prompt, temperature=0.7, max_output_tokens=200)
        insights = split_insights(text) if text else []
        if not insights:
            return [INSIGHT_FALLBACK]
        return insights

    async def generate_json(self, prompt: str) -> dict | None:
        return await generate_json(prompt)
