"""Australian financial-year date helpers.

A financial year runs from 1 July to 30 June inclusive and is keyed by its
two calendar years, e.g. "2024-25" for 1 Jul 2024 to 30 Jun 2025.
"""

import re
from datetime import date, timedelta
from typing import NamedTuple

from aupay.calculators.errors import InputError

_FY_KEY = re.compile(r"^(\d{4})-(\d{2})$")


class PeriodSegment(NamedTuple):
    """The part of a date range that falls inside one financial year."""

    financial_year: str
    start: date
    end: date
    days: int
    days_in_year: int


def financial_year_key(start_year: int) -> str:
    """Return the FY key for the year starting 1 July ``start_year``."""
    return f"{start_year}-{(start_year + 1) % 100:02d}"


def start_year_of(financial_year: str) -> int:
    """Parse the starting calendar year out of a "YYYY-YY" key."""
    match = _FY_KEY.match(financial_year)
    if match is None:
        raise InputError(f"Invalid financial year: {financial_year!r}. Expected 'YYYY-YY'.")
    start = int(match.group(1))
    if int(match.group(2)) != (start + 1) % 100:
        raise InputError(f"Invalid financial year: {financial_year!r}. Years must be consecutive.")
    return start


def financial_year_for(day: date) -> str:
    """Return the FY key containing ``day`` (1 July cut-over)."""
    start = day.year if day.month >= 7 else day.year - 1
    return financial_year_key(start)


def start_of(financial_year: str) -> date:
    return date(start_year_of(financial_year), 7, 1)


def end_of(financial_year: str) -> date:
    return date(start_year_of(financial_year) + 1, 6, 30)


def days_inclusive(start: date, end: date) -> int:
    """Number of days from ``start`` to ``end``, counting both endpoints."""
    return (end - start).days + 1


def days_in(financial_year: str) -> int:
    return days_inclusive(start_of(financial_year), end_of(financial_year))


def period_segments(start: date, end: date) -> list[PeriodSegment]:
    """Split an inclusive date range at financial-year boundaries.

    Raises:
        InputError: If ``end`` is before ``start``.
    """
    if end < start:
        raise InputError("End date must be on or after start date.")

    segments: list[PeriodSegment] = []
    cursor = start
    while cursor <= end:
        fy = financial_year_for(cursor)
        fy_end = end_of(fy)
        seg_end = min(end, fy_end)
        segments.append(PeriodSegment(
            financial_year=fy,
            start=cursor,
            end=seg_end,
            days=days_inclusive(cursor, seg_end),
            days_in_year=days_in(fy),
        ))
        cursor = fy_end + timedelta(days=1)
    return segments
