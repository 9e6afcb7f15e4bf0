"""FastAPI application serving the cached search results page."""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from src.core.config import SearchParameters
from src.pipeline.startup import OutcomeReader

logger = logging.getLogger(__name__)

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

PAGE_TITLE = "LinkedIn Job Search"

# Display labels for the form's select controls, in option order
SELECT_LABELS: dict[str, dict[str, str]] = {
    "dateSincePosted": {
        "past Week": "Past Week",
        "24hr": "Past 24 Hours",
        "past Month": "Past Month",
        "": "Anytime",
    },
    "jobType": {
        "": "Any",
        "full time": "Full-time",
        "part time": "Part-time",
        "contract": "Contract",
        "temporary": "Temporary",
        "volunteer": "Volunteer",
        "internship": "Internship",
    },
    "remoteFilter": {
        "": "Any",
        "remote": "Remote",
        "on site": "On-site",
        "hybrid": "Hybrid",
    },
    "salary": {
        "": "Any",
        "40000": "$40,000+",
        "60000": "$60,000+",
        "80000": "$80,000+",
        "100000": "$100,000+",
        "120000": "$120,000+",
    },
    "experienceLevel": {
        "": "Any",
        "internship": "Internship",
        "entry level": "Entry Level",
        "associate": "Associate",
        "senior": "Senior",
        "director": "Director",
        "executive": "Executive",
    },
    "sortBy": {
        "recent": "Recent",
        "relevant": "Relevant",
    },
}

FIELD_LABELS: dict[str, str] = {
    "dateSincePosted": "Date Posted",
    "jobType": "Job Type",
    "remoteFilter": "Remote",
    "salary": "Minimum Salary",
    "experienceLevel": "Experience Level",
    "sortBy": "Sort By",
}


def _select_fields() -> list[dict[str, object]]:
    fields = []
    for key, labels in SELECT_LABELS.items():
        fields.append({"name": key, "label": FIELD_LABELS[key], "options": list(labels.items())})
    return fields


def create_app(reader: OutcomeReader, params: SearchParameters) -> FastAPI:
    """Build the app. Handlers only ever read the cached outcome."""
    app = FastAPI(title=PAGE_TITLE, docs_url=None, redoc_url=None, openapi_url=None)
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    select_fields = _select_fields()
    flags = params.as_flags()

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        outcome = reader.current
        logger.debug("Rendering page (status=%s, %d jobs)", outcome.status, len(outcome.jobs))
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": PAGE_TITLE,
                "outcome": outcome,
                "params": flags,
                "select_fields": select_fields,
            },
        )

    return app
