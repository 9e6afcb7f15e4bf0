"""Tests for the LinkedIn guest-API query builder and pagination helpers."""

import logging
from urllib.parse import parse_qs, urlparse

import pytest

from src.core.config import SearchParameters
from src.platforms.linkedin.searcher import (
    GUEST_SEARCH_URL,
    RESULTS_PER_PAGE,
    _map_value,
    build_query,
    build_url,
    parse_limit,
    should_stop_pagination,
)


def _parse(url: str) -> dict[str, list[str]]:
    """Parse URL and return query params as dict."""
    return parse_qs(urlparse(url).query)


def _params(**overrides: str) -> SearchParameters:
    return SearchParameters.model_validate({**SearchParameters().as_flags(), **overrides})


# ---------------------------------------------------------------------------
# TestBuildQuery
# ---------------------------------------------------------------------------


class TestBuildQuery:
    """Query builder: filter codes, omission of unspecified values, pagination."""

    def test_defaults(self) -> None:
        assert build_query(SearchParameters()) == {
            "keywords": "Vue.js, Angular",
            "location": "london",
            "f_TPR": "r604800",
            "sortBy": "DD",
        }

    @pytest.mark.parametrize(
        ("value", "code"),
        [("24hr", "r86400"), ("past Week", "r604800"), ("past Month", "r2592000")],
    )
    def test_date_since_posted(self, value: str, code: str) -> None:
        assert build_query(_params(dateSincePosted=value))["f_TPR"] == code

    def test_anytime_omits_date_filter(self) -> None:
        assert "f_TPR" not in build_query(_params(dateSincePosted=""))

    def test_job_type(self) -> None:
        assert build_query(_params(jobType="full time"))["f_JT"] == "F"
        assert build_query(_params(jobType="internship"))["f_JT"] == "I"

    def test_remote_filter_on_site(self) -> None:
        assert build_query(_params(remoteFilter="on site"))["f_WT"] == "1"

    def test_remote_filter_remote_and_hybrid(self) -> None:
        assert build_query(_params(remoteFilter="remote"))["f_WT"] == "2"
        assert build_query(_params(remoteFilter="hybrid"))["f_WT"] == "3"

    def test_salary(self) -> None:
        assert build_query(_params(salary="40000"))["f_SB2"] == "1"
        assert build_query(_params(salary="120000"))["f_SB2"] == "5"

    def test_experience_level(self) -> None:
        assert build_query(_params(experienceLevel="entry level"))["f_E"] == "2"
        assert build_query(_params(experienceLevel="executive"))["f_E"] == "6"

    def test_sort_relevant(self) -> None:
        assert build_query(_params(sortBy="relevant"))["sortBy"] == "R"

    def test_unspecified_filters_omitted(self) -> None:
        query = build_query(SearchParameters())
        for name in ("f_JT", "f_WT", "f_SB2", "f_E"):
            assert name not in query

    def test_first_page_has_no_start(self) -> None:
        assert "start" not in build_query(SearchParameters(), page=0)

    def test_later_pages_offset(self) -> None:
        assert build_query(SearchParameters(), page=2)["start"] == str(2 * RESULTS_PER_PAGE)


class TestBuildUrl:
    def test_base_url(self) -> None:
        assert build_url(SearchParameters()).startswith(f"{GUEST_SEARCH_URL}?")

    def test_keyword_encoded(self) -> None:
        url = build_url(_params(keyword="C++ Developer"))
        assert "C%2B%2B" in url
        assert _parse(url)["keywords"] == ["C++ Developer"]

    def test_comma_keywords_round_trip(self) -> None:
        assert _parse(build_url(SearchParameters()))["keywords"] == ["Vue.js, Angular"]


# ---------------------------------------------------------------------------
# TestMapValue
# ---------------------------------------------------------------------------


class TestMapValue:
    def test_empty_is_unspecified(self) -> None:
        assert _map_value("", {"a": "1"}, "field") is None

    def test_case_insensitive(self) -> None:
        assert _map_value(" Remote ", {"remote": "2"}, "remoteFilter") == "2"

    def test_unknown_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="src.platforms.linkedin.searcher"):
            assert _map_value("moon", {"remote": "2"}, "remoteFilter") is None
        assert "moon" in caplog.text


# ---------------------------------------------------------------------------
# TestPagination
# ---------------------------------------------------------------------------


class TestParseLimit:
    def test_numeric(self) -> None:
        assert parse_limit("100") == 100

    def test_whitespace(self) -> None:
        assert parse_limit(" 7 ") == 7

    def test_non_numeric_means_unlimited(self) -> None:
        assert parse_limit("lots") is None

    def test_zero_means_unlimited(self) -> None:
        assert parse_limit("0") is None


class TestShouldStopPagination:
    def test_empty_page_stops(self) -> None:
        assert should_stop_pagination(0, 10, None, 0, 40) is True

    def test_limit_reached_stops(self) -> None:
        assert should_stop_pagination(25, 25, 20, 0, 40) is True

    def test_below_limit_continues(self) -> None:
        assert should_stop_pagination(25, 25, 100, 0, 40) is False

    def test_max_pages_stops(self) -> None:
        assert should_stop_pagination(25, 50, None, 1, 2) is True

    def test_unlimited_continues(self) -> None:
        assert should_stop_pagination(25, 500, None, 19, 40) is False
