"""Public holiday lookup and working-day counting per jurisdiction.

Holidays come from the Nager.Date public holiday API. When the API cannot be
reached or returns something unusable, the static table bundled in
``config/holidays.yaml`` is used instead.
"""

import logging
from datetime import date, timedelta
from typing import Any

import httpx

from aupay.calculators.errors import InputError
from aupay.calculators.fte import Jurisdiction
from config import load_yaml_config
from config.settings import settings

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": "aupay/0.1 (contractor pay calculator)",
    "Accept": "application/json",
}

_FALLBACK_FILE = "holidays.yaml"


def _parse_dates(values: list[str]) -> set[date]:
    return {date.fromisoformat(value) for value in values}


def _applies_to(holiday: dict[str, Any], state: str) -> bool:
    """National holidays have no counties; regional ones list AU-<state>."""
    counties = holiday.get("counties")
    return not counties or f"AU-{state}" in counties


class HolidayService:
    """Async public-holiday source with a static fallback table."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        enabled: bool | None = None,
        fallback: dict[int, dict[str, list[str]]] | None = None,
    ) -> None:
        self._base_url = (base_url or settings.holiday_api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.holiday_api_timeout
        self._enabled = enabled if enabled is not None else settings.holiday_lookup_enabled
        if fallback is None:
            fallback = load_yaml_config(_FALLBACK_FILE).get("holidays", {})
        self._fallback = fallback
        # National payload per year; states are filtered from it.
        self._payloads: dict[int, list[dict[str, Any]]] = {}
        self._cache: dict[tuple[int, str], set[date]] = {}

    async def fetch_year(self, year: int) -> list[dict[str, Any]]:
        """Fetch the national holiday list for ``year``, once per year.

        Raises:
            httpx.HTTPError: On network failure or a 4xx/5xx response.
            ValueError: If the body is not a JSON list of holiday objects.
        """
        if year in self._payloads:
            return self._payloads[year]

        url = f"{self._base_url}/{year}/AU"
        logger.info("Fetching public holidays: %s", url)
        async with httpx.AsyncClient(
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
            timeout=self._timeout,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            raise ValueError(f"Unexpected holiday payload for {year}: {payload!r:.200}")
        self._payloads[year] = payload
        return payload

    async def fetch_holidays(self, year: int, state: str) -> set[date]:
        """Fetch holidays observed in ``state`` during ``year`` from the API.

        Raises:
            httpx.HTTPError: On network failure or a 4xx/5xx response.
            ValueError: On a malformed payload.
        """
        holidays = {
            date.fromisoformat(item["date"])
            for item in await self.fetch_year(year)
            if _applies_to(item, state)
        }
        logger.info("Fetched %d holidays for %s %d", len(holidays), state, year)
        return holidays

    def fallback_holidays(self, year: int, state: str) -> set[date]:
        """Holidays from the bundled table; empty when the year is not listed."""
        return _parse_dates(self._fallback.get(year, {}).get(state, []))

    async def get_holidays(self, year: int, state: str) -> set[date]:
        """Holidays for ``state`` in ``year``, cached per (year, state)."""
        key = (year, state)
        if key in self._cache:
            return self._cache[key]

        if not self._enabled:
            holidays = self.fallback_holidays(year, state)
        else:
            try:
                holidays = await self.fetch_holidays(year, state)
            except (httpx.HTTPError, ValueError, KeyError):
                logger.warning(
                    "Holiday lookup failed for %s %d; using fallback table",
                    state,
                    year,
                    exc_info=True,
                )
                holidays = self.fallback_holidays(year, state)

        self._cache[key] = holidays
        return holidays


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


async def count_working_days(
    start: date,
    end: date,
    state: str,
    holidays: HolidayService,
) -> int:
    """Count weekdays from ``start`` to ``end`` inclusive, less public holidays.

    Raises:
        InputError: If the jurisdiction is unknown or ``end`` precedes ``start``.
    """
    try:
        jurisdiction = Jurisdiction(state)
    except ValueError as exc:
        raise InputError(f"Unknown jurisdiction: {state!r}") from exc
    if end < start:
        raise InputError("End date must be on or after start date.")

    holiday_set: set[date] = set()
    for year in range(start.year, end.year + 1):
        holiday_set |= await holidays.get_holidays(year, jurisdiction.value)

    count = 0
    day = start
    while day <= end:
        if not is_weekend(day) and day not in holiday_set:
            count += 1
        day += timedelta(days=1)
    return count
