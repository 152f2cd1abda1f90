"""Jolpica-F1 (Ergast compatible) schedule fetcher."""

import httpx
from pydantic import ValidationError

from f1countdown.api_logging import get_logger, log_fetch_call
from f1countdown.exceptions import (
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    NoDataError,
    RateLimitExceededError,
    ServerError,
)
from f1countdown.fetchers.base import DataFetcher
from f1countdown.schemas.api_response import APIResponse
from f1countdown.schemas.race import Race

logger = get_logger("fetchers.jolpica")

CURRENT_SEASON = "current"
NEXT_RACE = "current/next"


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class JolpicaFetcher(DataFetcher):
    """
    Data fetcher for the Jolpica-F1 API.

    Every request is checked against the client-side rate budget first and
    counted once the server has answered, whatever the status code.
    """

    async def fetch_season(self, year: int) -> list[Race]:
        """
        Fetch all races of a season.

        Args:
            year: Season year (e.g., 2024)

        Returns:
            Races in the order the API lists them
        """
        return await self._fetch_races(f"/{year}.json")

    async def fetch_current_season(self) -> list[Race]:
        return await self._fetch_races(f"/{CURRENT_SEASON}.json")

    async def fetch_next_race(self) -> Race | None:
        races = await self._fetch_races(f"/{NEXT_RACE}.json")
        return races[0] if races else None

    @log_fetch_call
    async def _fetch_races(self, path: str) -> list[Race]:
        try:
            self.budget.check()
        except RateLimitExceededError:
            logger.warning(
                "Rate budget exhausted (%d/%d), not requesting %s",
                self.budget.count, self.budget.max_requests, path,
            )
            raise

        try:
            request = self.client.build_request("GET", path)
        except httpx.InvalidURL as exc:
            raise InvalidURLError(path) from exc

        try:
            response = await self.client.send(request)
        except httpx.TransportError as exc:
            raise NetworkError(exc) from exc

        self.budget.record()

        if not isinstance(response, httpx.Response):
            raise InvalidResponseError()

        if response.status_code == 429:
            raise RateLimitExceededError(_retry_after(response))
        if not 200 <= response.status_code < 300:
            raise ServerError(response.status_code)

        if not response.content:
            raise NoDataError()

        try:
            envelope = APIResponse.model_validate(response.json())
        except (ValidationError, ValueError) as exc:
            raise DecodingError(exc) from exc

        return envelope.races
