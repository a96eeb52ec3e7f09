"""Income tax calculator — marginal bracket lookup and period proration."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from aupay.calculators.errors import DataError
from aupay.calculators.financial_year import period_segments
from aupay.calculators.money import as_amount
from aupay.calculators.tax_data import DEFAULT_STORE, BracketStore, TableKind

logger = logging.getLogger(__name__)


def calculate_tax(
    income: Decimal | int | float,
    financial_year: str,
    is_resident: bool = True,
    store: BracketStore = DEFAULT_STORE,
) -> Decimal:
    """Calculate Australian income tax on a full-year taxable income.

    Args:
        income: Taxable income for the financial year (must be >= 0).
        financial_year: FY key, e.g. "2024-25".
        is_resident: Use the resident table (True) or non-resident table.
        store: Bracket tables to read.

    Returns:
        Tax payable, unrounded.

    Raises:
        InputError: If income is negative or not finite.
        DataError: If no bracket covers the income.
    """
    amount = as_amount(income, "Income")
    brackets = store.get_brackets(financial_year, is_resident)

    for bracket in brackets:
        if bracket.upper is None or amount < bracket.upper:
            return bracket.base_tax + (amount - bracket.lower) * bracket.rate

    kind = TableKind.RESIDENT if is_resident else TableKind.NON_RESIDENT
    raise DataError(kind.value, financial_year)


def calculate_tax_for_period(
    start: date,
    end: date,
    annual_salary: Decimal | int | float,
    is_resident: bool = True,
    store: BracketStore = DEFAULT_STORE,
) -> Decimal:
    """Calculate tax on an annual salary earned over an inclusive date range.

    The range is split at each 30 June. Each segment's income is the salary
    prorated by days in segment over days in that financial year, and is
    taxed directly with that year's brackets. Segment taxes are summed.

    Raises:
        InputError: If ``end`` is before ``start`` or the salary is invalid.
    """
    salary = as_amount(annual_salary, "Salary")
    segments = period_segments(start, end)

    total_tax = Decimal("0")
    for segment in segments:
        segment_income = salary * segment.days / segment.days_in_year
        total_tax += calculate_tax(segment_income, segment.financial_year, is_resident, store)

    logger.debug(
        "Period tax %s..%s over %d segment(s): %s", start, end, len(segments), total_tax
    )
    return total_tax


def tax_breakdown(
    income: Decimal | int | float,
    financial_year: str,
    is_resident: bool = True,
    store: BracketStore = DEFAULT_STORE,
) -> dict[str, Any]:
    """Per-bracket breakdown of the tax on ``income``.

    Returns:
        Dict with total_tax, effective_rate (percent), breakdown and the
        financial year requested and actually applied.
    """
    amount = as_amount(income, "Income")
    kind = TableKind.RESIDENT if is_resident else TableKind.NON_RESIDENT
    applied_year = store.resolve_financial_year(financial_year, kind)
    total_tax = calculate_tax(amount, applied_year, is_resident, store)

    breakdown: list[dict[str, Any]] = []
    for bracket in store.get_brackets(applied_year, is_resident):
        if amount <= bracket.lower:
            break
        upper = bracket.upper if bracket.upper is not None else amount
        taxable = min(amount, upper) - bracket.lower
        breakdown.append({
            "lower": float(bracket.lower),
            "upper": float(bracket.upper) if bracket.upper is not None else None,
            "rate": float(bracket.rate),
            "taxable_amount": float(taxable),
            "tax": float(taxable * bracket.rate),
        })

    effective_rate = (total_tax / amount * 100) if amount > 0 else Decimal("0")

    return {
        "income": float(amount),
        "total_tax": float(total_tax),
        "effective_rate": float(round(effective_rate, 2)),
        "breakdown": breakdown,
        "financial_year": financial_year,
        "applied_financial_year": applied_year,
        "is_resident": is_resident,
    }
