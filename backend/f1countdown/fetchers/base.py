"""Base data fetcher."""

from abc import ABC, abstractmethod

import httpx

from f1countdown.config import Settings, get_settings
from f1countdown.fetchers.rate_limit import RateBudget
from f1countdown.schemas.race import Race


class DataFetcher(ABC):
    """Base class for race schedule fetchers."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        budget: RateBudget | None = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            headers={
                "Accept": "application/json",
                "User-Agent": self.settings.user_agent,
            },
            timeout=self.settings.request_timeout,
            follow_redirects=True,
        )
        self.budget = budget or RateBudget(
            max_requests=self.settings.max_requests_per_hour,
            window_seconds=self.settings.rate_limit_window_seconds,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def request_count(self) -> int:
        return self.budget.count

    def reset_rate_limit(self) -> None:
        self.budget.reset()

    @abstractmethod
    async def fetch_season(self, year: int) -> list[Race]:
        """Fetch every race of a season."""
        pass

    @abstractmethod
    async def fetch_current_season(self) -> list[Race]:
        """Fetch every race of the current season."""
        pass

    @abstractmethod
    async def fetch_next_race(self) -> Race | None:
        """Fetch the next scheduled race, if any."""
        pass
