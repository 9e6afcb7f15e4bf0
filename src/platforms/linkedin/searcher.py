"""LinkedIn guest-API query builder and pagination helpers.

Pure functions, no network dependency.
"""

import logging
from urllib.parse import quote_plus, urlencode

from src.core.config import SearchParameters

logger = logging.getLogger(__name__)

GUEST_SEARCH_URL = "https://www.linkedin.com/jobs-guest/jobs/api/seeMoreJobPostings/search"
RESULTS_PER_PAGE = 25

# --- Mapping dicts (URL concern) ---

DATE_SINCE_POSTED_MAP: dict[str, str] = {
    "24hr": "r86400",
    "past week": "r604800",
    "past month": "r2592000",
}

JOB_TYPE_MAP: dict[str, str] = {
    "full time": "F",
    "full-time": "F",
    "part time": "P",
    "part-time": "P",
    "contract": "C",
    "temporary": "T",
    "volunteer": "V",
    "internship": "I",
}

REMOTE_FILTER_MAP: dict[str, str] = {
    "on site": "1",
    "on-site": "1",
    "onsite": "1",
    "remote": "2",
    "hybrid": "3",
}

SALARY_MAP: dict[str, str] = {
    "40000": "1",
    "60000": "2",
    "80000": "3",
    "100000": "4",
    "120000": "5",
}

EXPERIENCE_LEVEL_MAP: dict[str, str] = {
    "internship": "1",
    "entry level": "2",
    "associate": "3",
    "senior": "4",
    "director": "5",
    "executive": "6",
}

SORT_BY_MAP: dict[str, str] = {
    "recent": "DD",
    "relevant": "R",
}


def build_query(params: SearchParameters, page: int = 0) -> dict[str, str]:
    """Build the guest-API query parameters for one results page.

    Args:
        params: Resolved search parameters.
        page: Zero-based page number. page=0 omits ``start``.

    Returns:
        Ordered query dict; unspecified filters are left out.
    """
    query: dict[str, str] = {"keywords": params.keyword}

    if params.location:
        query["location"] = params.location

    optional = (
        ("f_TPR", params.date_since_posted, DATE_SINCE_POSTED_MAP, "dateSincePosted"),
        ("f_JT", params.job_type, JOB_TYPE_MAP, "jobType"),
        ("f_WT", params.remote_filter, REMOTE_FILTER_MAP, "remoteFilter"),
        ("f_SB2", params.salary_floor, SALARY_MAP, "salary"),
        ("f_E", params.experience_level, EXPERIENCE_LEVEL_MAP, "experienceLevel"),
        ("sortBy", params.sort_by, SORT_BY_MAP, "sortBy"),
    )
    for name, value, mapping, field_name in optional:
        code = _map_value(value, mapping, field_name)
        if code is not None:
            query[name] = code

    if page > 0:
        query["start"] = str(page * RESULTS_PER_PAGE)

    return query


def build_url(params: SearchParameters, page: int = 0) -> str:
    """Fully qualified guest-API URL for one results page."""
    return f"{GUEST_SEARCH_URL}?{urlencode(build_query(params, page), quote_via=quote_plus)}"


def parse_limit(limit: str) -> int | None:
    """Interpret the free-form limit. None means no limit."""
    try:
        value = int(limit.strip())
    except ValueError:
        logger.warning("Limit %r is not a number; fetching until results run out", limit)
        return None
    return value if value > 0 else None


def should_stop_pagination(
    page_count: int, collected: int, limit: int | None, page: int, max_pages: int,
) -> bool:
    """Return True once no further page should be requested."""
    if page_count == 0:
        return True
    if limit is not None and collected >= limit:
        return True
    return page + 1 >= max_pages


def _map_value(value: str, mapping: dict[str, str], field_name: str) -> str | None:
    """Map a user-facing filter value to its URL code.

    Empty means unspecified. Unknown values are logged and skipped.
    """
    key = value.lower().strip()
    if not key:
        return None
    code = mapping.get(key)
    if code is None:
        logger.warning("Unknown %s value '%s', skipping", field_name, value)
    return code
