"""Core data models for the job board."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class JobPosting(BaseModel):
    """A job listing returned by the search client."""

    model_config = ConfigDict(frozen=True)

    position: str
    company: str
    location: str = ""
    date: str = ""
    ago_time: str = ""
    salary: str | None = None
    company_logo: str | None = None
    job_url: str = ""


OutcomeStatus = Literal["pending", "fulfilled", "failed"]


class SearchOutcome(BaseModel):
    """Result of the startup search: a job list or an error message, never both.

    Frozen: the cell that owns it replaces it once instead of mutating it.
    """

    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus = "pending"
    # Records are kept exactly as the client returned them
    jobs: list[Any] = Field(default_factory=list)
    error_message: str = ""

    @classmethod
    def pending(cls) -> "SearchOutcome":
        return cls()

    @classmethod
    def fulfilled(cls, jobs: list[Any]) -> "SearchOutcome":
        return cls(status="fulfilled", jobs=list(jobs))

    @classmethod
    def failed(cls, message: str) -> "SearchOutcome":
        return cls(status="failed", error_message=message)

    @property
    def is_settled(self) -> bool:
        return self.status != "pending"
