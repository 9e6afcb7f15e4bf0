"""Startup fetch: run the one search, settle the cached outcome, open the browser.

Data flow:
  1. Search client query (exactly once)
  2. Shape check → fulfilled or failed outcome
  3. OutcomeCell.settle (single write)
  4. One-shot post-settlement action (browser open)
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.core.config import SearchParameters
from src.core.schemas import SearchOutcome
from src.platforms.base import JobSearchClient

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE_MESSAGE = "No jobs found or unexpected API response format."
RATE_LIMIT_HINT = " You might have hit a rate limit. Please wait and try again."


class OutcomeReader:
    """Read-only view of an OutcomeCell, handed to request handlers."""

    def __init__(self, cell: "OutcomeCell") -> None:
        self._cell = cell

    @property
    def current(self) -> SearchOutcome:
        return self._cell.current


class OutcomeCell:
    """Holds the process-wide SearchOutcome. Pending until settled exactly once."""

    def __init__(self) -> None:
        self._outcome = SearchOutcome.pending()

    @property
    def current(self) -> SearchOutcome:
        return self._outcome

    def settle(self, outcome: SearchOutcome) -> None:
        if self._outcome.is_settled:
            msg = "Search outcome already settled"
            raise RuntimeError(msg)
        if not outcome.is_settled:
            msg = "Cannot settle with a pending outcome"
            raise ValueError(msg)
        self._outcome = outcome

    def reader(self) -> OutcomeReader:
        return OutcomeReader(self)


def describe_failure(error: BaseException) -> str:
    """Build the user-facing banner text for a failed search."""
    detail = str(error) or "Unknown error"
    message = f"Failed to fetch jobs: {detail}. Please try again later."
    if _status_code(error) == 429:
        message += RATE_LIMIT_HINT
    return message


def outcome_from_response(response: Any) -> SearchOutcome:
    """Classify a client response: a list/tuple is a result set, anything else is not."""
    if isinstance(response, (list, tuple)):
        return SearchOutcome.fulfilled(list(response))
    return SearchOutcome.failed(UNEXPECTED_RESPONSE_MESSAGE)


class StartupFetch:
    """Runs the startup search once and records its outcome.

    ``on_settled`` is awaited after the outcome is stored, whatever it is.
    """

    def __init__(
        self,
        client: JobSearchClient,
        params: SearchParameters,
        cell: OutcomeCell,
        on_settled: Callable[[], Awaitable[Any]] | None = None,
    ) -> None:
        self._client = client
        self._params = params
        self._cell = cell
        self._on_settled = on_settled
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def run(self) -> SearchOutcome:
        if self._started:
            msg = "Startup fetch already ran"
            raise RuntimeError(msg)
        self._started = True

        logger.info("Fetching jobs with effective options: %s", self._params.as_flags())
        try:
            response = await self._client.query(self._params)
        except Exception as e:
            logger.error("Error fetching jobs from %s: %s", self._client.platform_id, e)
            outcome = SearchOutcome.failed(describe_failure(e))
        else:
            outcome = outcome_from_response(response)
            if outcome.status == "fulfilled":
                logger.info("Fetched %d jobs", len(outcome.jobs))
            else:
                logger.warning("Search response was not a list: %r", response)

        self._cell.settle(outcome)

        if self._on_settled is not None:
            try:
                await self._on_settled()
            except Exception:
                logger.warning("Post-search action failed", exc_info=True)
        return outcome


def _status_code(error: BaseException) -> int | None:
    """HTTP status carried by the error, directly or on its response."""
    status = getattr(error, "status_code", None)
    if status is None:
        response = getattr(error, "response", None)
        status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None
