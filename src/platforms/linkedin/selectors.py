"""LinkedIn guest-API card selector constants with fallbacks.

Each constant is a tuple so callers iterate until a match is found.
"""

# --- Job card container ---
CARD_SELECTORS: tuple[str, ...] = (
    "li",
)

POSITION_SELECTORS: tuple[str, ...] = (
    ".base-search-card__title",
    "h3",
)

COMPANY_SELECTORS: tuple[str, ...] = (
    ".base-search-card__subtitle",
    "h4",
)

LOCATION_SELECTORS: tuple[str, ...] = (
    ".job-search-card__location",
)

# <time datetime="2026-10-12">
DATE_SELECTORS: tuple[str, ...] = (
    "time",
)

# Relative age ("3 days ago"); fresh listings use the --new variant
AGO_TIME_SELECTORS: tuple[str, ...] = (
    ".job-search-card__listdate",
    ".job-search-card__listdate--new",
)

SALARY_SELECTORS: tuple[str, ...] = (
    ".job-search-card__salary-info",
)

JOB_LINK_SELECTORS: tuple[str, ...] = (
    ".base-card__full-link",
    'a[href*="/jobs/view/"]',
)

LOGO_SELECTORS: tuple[str, ...] = (
    ".artdeco-entity-image",
)
LOGO_ATTRS: tuple[str, ...] = ("data-delayed-url", "src")
