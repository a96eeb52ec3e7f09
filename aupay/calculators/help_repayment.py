"""HECS/HELP study-loan repayment calculator."""

from decimal import Decimal
from typing import Any

from aupay.calculators.errors import DataError
from aupay.calculators.money import as_amount
from aupay.calculators.tax_data import DEFAULT_STORE, BracketStore, TableKind


def repayment_rate(
    repayment_income: Decimal | int | float,
    financial_year: str,
    store: BracketStore = DEFAULT_STORE,
) -> Decimal:
    """Return the repayment rate for the tier containing ``repayment_income``.

    Tiers are flat: the matched rate applies to the whole income, not just
    the part above the tier's lower bound.

    Raises:
        InputError: If the income is negative or not finite.
        DataError: If no tier covers the income.
    """
    income = as_amount(repayment_income, "Repayment income")
    for tier in store.get_help_brackets(financial_year):
        if tier.upper is None or income < tier.upper:
            return tier.rate
    raise DataError(TableKind.HELP.value, financial_year)


def repayment_amount(
    repayment_income: Decimal | int | float,
    financial_year: str,
    store: BracketStore = DEFAULT_STORE,
) -> Decimal:
    """Compulsory repayment for the year: income times the tier rate."""
    income = as_amount(repayment_income, "Repayment income")
    return income * repayment_rate(income, financial_year, store)


def assemble_repayment_income(
    taxable_income: Decimal | int | float,
    reportable_fringe_benefits: Decimal | int | float = 0,
    reportable_super_contributions: Decimal | int | float = 0,
    additional_reportable_super: Decimal | int | float = 0,
    net_investment_losses: Decimal | int | float = 0,
    super_guarantee_rate: Decimal | None = None,
) -> Decimal:
    """Assemble HELP repayment income from its components.

    When ``super_guarantee_rate`` is given, the compulsory super guarantee on
    taxable income is added as a reportable super component. Leave it as
    None when ``reportable_super_contributions`` already includes it.
    """
    taxable = as_amount(taxable_income, "Taxable income")
    total = (
        taxable
        + as_amount(reportable_fringe_benefits, "Reportable fringe benefits")
        + as_amount(reportable_super_contributions, "Reportable super contributions")
        + as_amount(additional_reportable_super, "Additional reportable super")
        + as_amount(net_investment_losses, "Net investment losses")
    )
    if super_guarantee_rate is not None:
        total += taxable * as_amount(super_guarantee_rate, "Super guarantee rate")
    return total


def calculate_help_repayment(
    repayment_income: Decimal | int | float,
    financial_year: str,
    store: BracketStore = DEFAULT_STORE,
) -> dict[str, Any]:
    """Repayment summary for an already-assembled repayment income."""
    income = as_amount(repayment_income, "Repayment income")
    applied_year = store.resolve_financial_year(financial_year, TableKind.HELP)
    rate = repayment_rate(income, applied_year, store)

    return {
        "repayment_income": float(income),
        "repayment_rate": float(rate),
        "annual_repayment": float(income * rate),
        "financial_year": financial_year,
        "applied_financial_year": applied_year,
    }
