"""Abstract base class for job search clients."""

from abc import ABC, abstractmethod

from src.core.config import SearchParameters
from src.core.schemas import JobPosting


class JobSearchClient(ABC):
    """Base class that every search client must implement."""

    @property
    @abstractmethod
    def platform_id(self) -> str:
        """Unique identifier for this platform (e.g. 'linkedin')."""

    @abstractmethod
    async def query(self, params: SearchParameters) -> list[JobPosting]:
        """Run one search and return postings in the platform's order.

        Failures raise an exception; HTTP failures expose ``status_code``.
        """
