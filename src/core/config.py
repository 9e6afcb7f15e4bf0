"""Configuration models and YAML loader for the job board."""

import os
from pathlib import Path
from typing import Any, Literal, get_args

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

DateSincePosted = Literal["24hr", "past Week", "past Month", ""]
JobType = Literal[
    "full time", "part time", "contract", "temporary", "volunteer", "internship", "",
]
RemoteFilter = Literal["on site", "remote", "hybrid", ""]
SalaryFloor = Literal["40000", "60000", "80000", "100000", "120000", ""]
ExperienceLevel = Literal[
    "internship", "entry level", "associate", "senior", "director", "executive", "",
]
SortBy = Literal["recent", "relevant"]


class SearchParameters(BaseModel):
    """The resolved parameters for the single startup search.

    Field aliases are the command-line keys (``--dateSincePosted=...``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    keyword: str = Field(default="Vue.js, Angular", min_length=1)
    location: str = Field(default="london", min_length=1)
    date_since_posted: DateSincePosted = Field(default="past Week", alias="dateSincePosted")
    limit: str = Field(default="100", min_length=1)
    job_type: JobType = Field(default="", alias="jobType")
    remote_filter: RemoteFilter = Field(default="", alias="remoteFilter")
    salary_floor: SalaryFloor = Field(default="", alias="salary")
    experience_level: ExperienceLevel = Field(default="", alias="experienceLevel")
    sort_by: SortBy = Field(default="recent", alias="sortBy")

    def as_flags(self) -> dict[str, str]:
        """Return the parameters keyed by their command-line names."""
        return self.model_dump(by_alias=True)


DEFAULT_PARAMETERS = SearchParameters()

# Command-line key -> allowed values (None = free-form)
PARAMETER_CHOICES: dict[str, tuple[str, ...] | None] = {
    "keyword": None,
    "location": None,
    "dateSincePosted": get_args(DateSincePosted),
    "limit": None,
    "jobType": get_args(JobType),
    "remoteFilter": get_args(RemoteFilter),
    "salary": get_args(SalaryFloor),
    "experienceLevel": get_args(ExperienceLevel),
    "sortBy": get_args(SortBy),
}


class ServerConfig(BaseModel):
    """HTTP listener configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)

    @property
    def base_url(self) -> str:
        host = "localhost" if self.host in ("127.0.0.1", "0.0.0.0") else self.host
        return f"http://{host}:{self.port}"

    def with_env(self, environ: dict[str, str] | None = None) -> "ServerConfig":
        """Apply the ``PORT`` environment variable over the configured port."""
        env = os.environ if environ is None else environ
        raw = env.get("PORT")
        if raw is None or not raw.strip():
            return self
        return self.model_validate({**self.model_dump(), "port": raw.strip()})


class LinkedInConfig(BaseModel):
    """Tuning for the LinkedIn guest search client."""

    timeout_s: float = Field(default=30.0, gt=0)
    max_pages: int = Field(default=40, ge=1)
    page_delay_min_s: float = Field(default=1.0, ge=0.0)
    page_delay_max_s: float = Field(default=3.0, ge=0.0)

    @model_validator(mode="after")
    def delay_range_ordered(self) -> "LinkedInConfig":
        if self.page_delay_max_s < self.page_delay_min_s:
            msg = "page_delay_max_s must be >= page_delay_min_s"
            raise ValueError(msg)
        return self


class Settings(BaseModel):
    """Top-level settings, optionally loaded from YAML."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    linkedin: LinkedInConfig = Field(default_factory=LinkedInConfig)
    # Raw search overrides keyed by command-line name; validated by the resolver
    search: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def stringify_search_values(cls, data: Any) -> Any:
        # YAML turns `limit: 50` and `salary: 40000` into ints
        if isinstance(data, dict) and isinstance(data.get("search"), dict):
            data = {
                **data,
                "search": {
                    str(k): "" if v is None else str(v)
                    for k, v in data["search"].items()
                },
            }
        return data

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        try:
            raw: Any = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            msg = f"Config file is not valid YAML: {path}: {e}"
            raise ValueError(msg) from e
        if not isinstance(raw, dict):
            msg = f"Config file must contain a mapping: {path}"
            raise ValueError(msg)
        return cls.model_validate(raw)
