"""LinkedIn guest-API parser: converts result HTML into JobPosting objects.

Design rules:
  - Every selector lookup uses a fallback tuple.
  - Cards without a position or company are skipped.
  - Missing optional fields become "" or None (never crash).
"""

import logging
from urllib.parse import urlparse, urlunparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from src.core.schemas import JobPosting
from src.platforms.linkedin.selectors import (
    AGO_TIME_SELECTORS,
    CARD_SELECTORS,
    COMPANY_SELECTORS,
    DATE_SELECTORS,
    JOB_LINK_SELECTORS,
    LOCATION_SELECTORS,
    LOGO_ATTRS,
    LOGO_SELECTORS,
    POSITION_SELECTORS,
    SALARY_SELECTORS,
)

logger = logging.getLogger(__name__)

LINKEDIN_BASE = "https://www.linkedin.com"


class LinkedInParser:
    """Parses one page of guest-API search results."""

    def parse_page(self, html: str) -> list[JobPosting]:
        """Parse every card on the page, in document order."""
        soup = BeautifulSoup(html, "html.parser")
        cards = self._find_cards(soup)
        results: list[JobPosting] = []
        for card in cards:
            try:
                posting = self.parse_card(card)
            except Exception:
                logger.debug("Failed to parse card, skipping", exc_info=True)
                continue
            if posting is not None:
                results.append(posting)
        logger.debug("Parsed %d postings from %d cards", len(results), len(cards))
        return results

    def parse_card(self, card: Tag) -> JobPosting | None:
        """Parse a single card. Returns None if position or company is missing."""
        position = self._text(card, POSITION_SELECTORS)
        company = self._text(card, COMPANY_SELECTORS)
        if not position or not company:
            logger.debug("Card missing position or company, skipping")
            return None

        salary = " ".join(self._text(card, SALARY_SELECTORS).split())

        return JobPosting(
            position=position,
            company=company,
            location=self._text(card, LOCATION_SELECTORS),
            date=self._attr(card, DATE_SELECTORS, ("datetime",)),
            ago_time=self._text(card, AGO_TIME_SELECTORS),
            salary=salary or None,
            company_logo=self._attr(card, LOGO_SELECTORS, LOGO_ATTRS) or None,
            job_url=self._job_url(card),
        )

    # --- Private helpers ---

    @staticmethod
    def _find_cards(soup: BeautifulSoup) -> list[Tag]:
        for selector in CARD_SELECTORS:
            cards = soup.select(selector)
            if cards:
                return cards
        return []

    @staticmethod
    def _find_first(card: Tag, selectors: tuple[str, ...]) -> Tag | None:
        """Return the first element matching any selector in order."""
        for selector in selectors:
            el = card.select_one(selector)
            if el is not None:
                return el
        return None

    def _text(self, card: Tag, selectors: tuple[str, ...]) -> str:
        el = self._find_first(card, selectors)
        if el is None:
            return ""
        return el.get_text(strip=True)

    def _attr(self, card: Tag, selectors: tuple[str, ...], attrs: tuple[str, ...]) -> str:
        el = self._find_first(card, selectors)
        if el is None:
            return ""
        for attr in attrs:
            value = el.get(attr)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return ""

    def _job_url(self, card: Tag) -> str:
        href = self._attr(card, JOB_LINK_SELECTORS, ("href",))
        return self._clean_url(href) if href else ""

    @staticmethod
    def _clean_url(href: str) -> str:
        """Strip tracking params and prepend domain if relative."""
        if href.startswith("/"):
            href = f"{LINKEDIN_BASE}{href}"
        parsed = urlparse(href)
        return urlunparse((parsed.scheme, parsed.netloc, parsed.path, "", "", ""))
