"""Pydantic request and response models for the HTTP API."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from aupay.calculators.fte import Jurisdiction, RateType
from aupay.calculators.money import Money
from aupay.calculators.tax_data import DEFAULT_FINANCIAL_YEAR

# --- Tax ---


class TaxRequest(BaseModel):
    """Request body for /tax."""

    income: Decimal = Field(ge=0)
    financial_year: str = DEFAULT_FINANCIAL_YEAR
    is_resident: bool = True


class PeriodTaxRequest(BaseModel):
    """Request body for /tax/period."""

    start_date: date
    end_date: date
    annual_salary: Decimal = Field(ge=0)
    is_resident: bool = True


class Segment(BaseModel):
    """One financial-year slice of a period tax calculation."""

    financial_year: str
    start_date: date
    end_date: date
    days: int
    days_in_year: int
    income: Money
    tax: Money


class PeriodTaxResponse(BaseModel):
    total_tax: Money
    segments: list[Segment]


# --- HECS/HELP ---


class HelpRequest(BaseModel):
    """Request body for /help. Components sum to the repayment income."""

    taxable_income: Decimal = Field(ge=0)
    reportable_fringe_benefits: Decimal = Field(default=Decimal("0"), ge=0)
    reportable_super_contributions: Decimal = Field(default=Decimal("0"), ge=0)
    additional_reportable_super: Decimal = Field(default=Decimal("0"), ge=0)
    net_investment_losses: Decimal = Field(default=Decimal("0"), ge=0)
    # Add compulsory SG on taxable income; leave False if already in reportable super
    include_super_guarantee: bool = False
    financial_year: str = DEFAULT_FINANCIAL_YEAR


# --- FTE ---


class FteRequest(BaseModel):
    """Request body for /fte.

    When ``working_days`` is omitted it is counted from the date range and
    the jurisdiction's public holidays.
    """

    rate: Decimal = Field(ge=0)
    rate_type: RateType = RateType.DAILY
    start_date: date
    end_date: date
    working_days: int | None = Field(default=None, ge=0)
    holiday_days: int = Field(default=0, ge=0)
    furlough_days: int = Field(default=0, ge=0)
    hours_per_day: Decimal | None = Field(default=None, gt=0, le=24)
    state: Jurisdiction
    include_tax_estimate: bool = False


# --- Pay ---


class PayRequest(BaseModel):
    """Request body for /pay.

    Supply either ``working_days`` or a date range plus ``state`` to count
    them. ``gst_rate`` defaults to the configured GST rate.
    """

    daily_rate: Decimal = Field(ge=0)
    gst_rate: Decimal | None = Field(default=None, ge=0, le=1)
    tax_rate: Decimal = Field(ge=0, le=1)
    super_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    hecs_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    working_days: int | None = Field(default=None, ge=0)
    start_date: date | None = None
    end_date: date | None = None
    state: Jurisdiction | None = None


class WorkingDaysResponse(BaseModel):
    start_date: date
    end_date: date
    state: Jurisdiction
    working_days: int
