"""Company-verification adapter: website fetch/parse and known-company registry."""

import logging
from typing import Protocol

import httpx
from bs4 import BeautifulSoup

from config import settings
from models.schemas.job import CompanyRecord
from services.errors import EnrichmentError

logger = logging.getLogger(__name__)

# Stand-in registry until a real company database is wired in.
KNOWN_COMPANIES = [
    "Google", "Microsoft", "Apple", "Amazon", "Meta", "Netflix",
    "Tesla", "IBM", "Oracle", "Salesforce", "Adobe", "Intel",
]


class CompanyVerificationAdapter(Protocol):
    async def fetch_page(self, url: str) -> str: ...

    async def lookup_known_company(self, name: str) -> CompanyRecord | None: ...


def page_mentions_company(html: str, company_name: str) -> bool:
    """True if the company name appears in the page title or meta description."""
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text() if soup.title else ""
    meta = soup.find("meta", attrs={"name": "description"})
    description = meta.get("content", "") if meta else ""

    name = company_name.lower()
    return name in title.lower() or name in str(description).lower()


class HttpCompanyLookup:
    """Fetches company pages over HTTP and checks the static known-company list."""

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        known_companies: list[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.company_fetch_timeout_seconds
        self.user_agent = user_agent or settings.company_fetch_user_agent
        self.known_companies = known_companies if known_companies is not None else KNOWN_COMPANIES
        self._transport = transport

    async def fetch_page(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.text
        except httpx.HTTPError as e:
            raise EnrichmentError(f"Failed to fetch {url}: {e}") from e

    async def lookup_known_company(self, name: str) -> CompanyRecord | None:
        normalized = name.lower()
        for company in self.known_companies:
            if company.lower() in normalized:
                return CompanyRecord(name=name, industry="Technology", verified=True)
        return None
