"""LinkedIn search client: wires query builder, parser and HTTP transport."""

import logging
from types import TracebackType

import httpx

from src.core.config import LinkedInConfig, SearchParameters
from src.core.schemas import JobPosting
from src.platforms.base import JobSearchClient
from src.platforms.linkedin.pacing import wait_between_pages
from src.platforms.linkedin.parser import LinkedInParser
from src.platforms.linkedin.searcher import (
    GUEST_SEARCH_URL,
    build_query,
    parse_limit,
    should_stop_pagination,
)

logger = logging.getLogger(__name__)

# LinkedIn rejects requests without a browser-like user agent
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class LinkedInError(Exception):
    """A LinkedIn request failed. ``status_code`` is set for HTTP errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(LinkedInError):
    """LinkedIn answered 429 Too Many Requests."""

    def __init__(self, message: str = "Request failed with status code 429") -> None:
        super().__init__(message, status_code=429)


class LinkedInClient(JobSearchClient):
    """Search client for LinkedIn's public guest job search endpoint.

    Usage::

        async with LinkedInClient(config) as client:
            jobs = await client.query(params)

    An ``httpx.AsyncClient`` may be injected (tests use a MockTransport);
    an injected client is not closed by this object.
    """

    def __init__(
        self,
        config: LinkedInConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or LinkedInConfig()
        self._http = http
        self._owns_http = http is None
        self._parser = LinkedInParser()

    @property
    def platform_id(self) -> str:
        return "linkedin"

    async def __aenter__(self) -> "LinkedInClient":
        self._ensure_http()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    async def query(self, params: SearchParameters) -> list[JobPosting]:
        """Fetch result pages until the limit is met or results run out."""
        limit = parse_limit(params.limit)
        collected: list[JobPosting] = []

        for page in range(self._config.max_pages):
            postings = await self._fetch_page(params, page)
            collected.extend(postings)
            logger.info(
                "Page %d: parsed %d postings (%d total)", page, len(postings), len(collected),
            )

            if should_stop_pagination(
                len(postings), len(collected), limit, page, self._config.max_pages,
            ):
                break

            await wait_between_pages(self._config)

        if limit is not None:
            collected = collected[:limit]
        return collected

    async def _fetch_page(self, params: SearchParameters, page: int) -> list[JobPosting]:
        http = self._ensure_http()
        query = build_query(params, page)
        logger.debug("GET %s %s", GUEST_SEARCH_URL, query)
        try:
            response = await http.get(GUEST_SEARCH_URL, params=query)
        except httpx.TimeoutException as e:
            msg = f"Request to LinkedIn timed out: {e}"
            raise LinkedInError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Request to LinkedIn failed: {e}"
            raise LinkedInError(msg) from e

        if response.status_code == 429:
            raise RateLimitError
        if not response.is_success:
            msg = f"Request failed with status code {response.status_code}"
            raise LinkedInError(msg, status_code=response.status_code)

        return self._parser.parse_page(response.text)

    def _ensure_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                headers=HEADERS,
                timeout=self._config.timeout_s,
                follow_redirects=True,
            )
            self._owns_http = True
        return self._http
