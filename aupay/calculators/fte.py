"""Contractor-to-permanent full-time-equivalent (FTE) conversion.

Turns a contract rate over a period into the base salary and super package
an employer could fund for the same annual cost. The annualised contractor
revenue is divided by an on-cost multiplier built from the super guarantee,
workers' compensation premium, leave loading and state payroll tax.

Constants are held in an ``FteConstants`` instance that callers pass in, so
rate changes (e.g. an SG increase on 1 July) are a single ``set_constant``
call rather than a code change.
"""

import logging
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aupay.calculators.errors import InputError
from aupay.calculators.financial_year import financial_year_for
from aupay.calculators.income_tax import calculate_tax
from aupay.calculators.money import Money, Rate, as_amount, round_money
from aupay.calculators.tax_data import DEFAULT_STORE, BracketStore

logger = logging.getLogger(__name__)

_MAX_PAYROLL_TAX_RATE = Decimal("0.20")

PayrollTaxRate = Annotated[Rate, Field(ge=0, le=_MAX_PAYROLL_TAX_RATE)]


class Jurisdiction(StrEnum):
    """Australian states and territories."""

    ACT = "ACT"
    NSW = "NSW"
    NT = "NT"
    QLD = "QLD"
    SA = "SA"
    TAS = "TAS"
    VIC = "VIC"
    WA = "WA"


class RateType(StrEnum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


def _default_payroll_tax_rates() -> dict[Jurisdiction, Decimal]:
    # Headline rates on wages above each state's threshold.
    return {
        Jurisdiction.ACT: Decimal("0.062"),
        Jurisdiction.NSW: Decimal("0.0545"),
        Jurisdiction.NT: Decimal("0.055"),
        Jurisdiction.QLD: Decimal("0.048"),
        Jurisdiction.SA: Decimal("0.0495"),
        Jurisdiction.TAS: Decimal("0.06"),
        Jurisdiction.VIC: Decimal("0.0435"),
        Jurisdiction.WA: Decimal("0.055"),
    }


class FteConstants(BaseModel):
    """Statutory rates and working-year assumptions used by ``convert``."""

    model_config = ConfigDict(validate_assignment=True)

    sg_rate: Rate = Field(default=Decimal("0.115"), ge=0, le=1)
    payroll_tax_rates: dict[Jurisdiction, PayrollTaxRate] = Field(
        default_factory=_default_payroll_tax_rates
    )
    # Average premium for low-risk white-collar work
    workers_comp_rate: Rate = Field(default=Decimal("0.016"), ge=0, le=1)
    # 17.5% loading on four weeks' annual leave
    leave_loading_rate: Rate = Field(
        default=Decimal("0.175") * 4 / 52, ge=0, le=1
    )
    chargeable_days: int = Field(default=220, gt=0, le=366)
    std_hours_per_day: Money = Field(default=Decimal("7.6"), gt=0, le=24)
    gst_rate: Rate = Field(default=Decimal("0.10"), ge=0, le=1)
    medicare_levy_rate: Rate = Field(default=Decimal("0.02"), ge=0, le=1)

    def set_constant(self, name: str, value: object) -> None:
        """Replace one constant, keeping its type.

        Raises:
            InputError: Unknown constant or value out of range.
            TypeError: ``value`` is not the same type as the current value.
        """
        if name not in type(self).model_fields:
            raise InputError(f"Unknown constant {name!r}.")
        current = getattr(self, name)
        if isinstance(value, bool) or not isinstance(value, type(current)):
            raise TypeError(
                f"Type mismatch for {name}: expected {type(current).__name__}, "
                f"got {type(value).__name__}"
            )
        try:
            setattr(self, name, value)
        except ValidationError as exc:
            raise InputError(f"Invalid value for {name}: {value!r}") from exc
        logger.info("FTE constant %s changed from %s to %s", name, current, value)

    def set_payroll_tax_rate(self, state: str, rate: Decimal | float) -> None:
        """Set one jurisdiction's payroll-tax rate (a fraction, 0 to 0.20)."""
        try:
            jurisdiction = Jurisdiction(state)
        except ValueError as exc:
            raise InputError(f"Unknown jurisdiction: {state!r}") from exc
        amount = as_amount(rate, "Payroll-tax rate")
        if amount > _MAX_PAYROLL_TAX_RATE:
            raise InputError("Payroll-tax rate should be a fraction between 0 and 0.20.")
        previous = self.payroll_tax_rates.get(jurisdiction)
        self.payroll_tax_rates[jurisdiction] = amount
        logger.info("Payroll-tax rate for %s changed from %s to %s", jurisdiction, previous, amount)

    def payroll_tax_rate_for(self, state: str) -> Decimal:
        """Payroll-tax rate for ``state``; 0 when the state is not listed."""
        return self.payroll_tax_rates.get(state, Decimal("0"))  # type: ignore[call-overload]

    def on_cost_multiplier(self, state: str) -> Decimal:
        """Employer cost per dollar of base salary.

        Payroll tax is levied on the wage base including super and leave
        loading, so it compounds on those on-costs.
        """
        sg = self.sg_rate
        ll = self.leave_loading_rate
        pt = self.payroll_tax_rate_for(state)
        return 1 + sg + self.workers_comp_rate + ll + pt * (1 + sg + ll)


class FteInput(BaseModel):
    """A contract engagement to convert."""

    rate: Decimal = Field(ge=0)
    rate_type: RateType = RateType.DAILY
    start_date: date
    end_date: date
    working_days: int = Field(ge=0)
    holiday_days: int = Field(default=0, ge=0)
    furlough_days: int = Field(default=0, ge=0)
    hours_per_day: Decimal | None = Field(default=None, gt=0, le=24)
    state: Jurisdiction

    @property
    def effective_days(self) -> int:
        return self.working_days - self.holiday_days - self.furlough_days


class FteResult(BaseModel):
    """Conversion output. Money in AUD to cents; multiplier to 4 dp."""

    effective_days: int
    gross_contractor_ex_gst: Money
    annualised_contractor_cost: Money
    multiplier: Rate
    base_salary: Money
    super_amount: Money
    total_package: Money
    financial_year: str | None = None
    payg: Money | None = None
    medicare: Money | None = None
    net_take_home: Money | None = None


def convert(
    fte_input: FteInput,
    include_tax_estimate: bool = False,
    constants: FteConstants | None = None,
    store: BracketStore = DEFAULT_STORE,
) -> FteResult:
    """Convert a contract rate over a period into an equivalent salary package.

    Args:
        fte_input: Rate, period, day counts and jurisdiction.
        include_tax_estimate: Also estimate resident PAYG, Medicare levy and
            net take-home on the base salary, using the financial year of
            the start date.
        constants: Rates to apply; defaults to a fresh ``FteConstants()``.
        store: Bracket tables for the tax estimate.

    Raises:
        InputError: If the end date precedes the start date or there are no
            chargeable days after holidays and furlough.
    """
    consts = constants if constants is not None else FteConstants()

    if fte_input.end_date < fte_input.start_date:
        raise InputError("End date must be on or after start date.")
    effective_days = fte_input.effective_days
    if effective_days <= 0:
        raise InputError("No chargeable contractor days in the period.")

    hours_per_day = fte_input.hours_per_day or consts.std_hours_per_day
    units_worked = {
        RateType.HOURLY: effective_days * hours_per_day,
        RateType.DAILY: Decimal(effective_days),
        RateType.WEEKLY: Decimal(effective_days) / 5,
    }[fte_input.rate_type]
    gross = fte_input.rate * units_worked

    annualised = gross * consts.chargeable_days / effective_days

    multiplier = consts.on_cost_multiplier(fte_input.state)
    base_salary = annualised / multiplier
    super_amount = base_salary * consts.sg_rate
    total_package = base_salary + super_amount

    result = FteResult(
        effective_days=effective_days,
        gross_contractor_ex_gst=round_money(gross),
        annualised_contractor_cost=round_money(annualised),
        multiplier=round_money(multiplier, 4),
        base_salary=round_money(base_salary),
        super_amount=round_money(super_amount),
        total_package=round_money(total_package),
    )

    if include_tax_estimate:
        fy = financial_year_for(fte_input.start_date)
        payg = calculate_tax(base_salary, fy, is_resident=True, store=store)
        medicare = base_salary * consts.medicare_levy_rate
        result.financial_year = fy
        result.payg = round_money(payg)
        result.medicare = round_money(medicare)
        result.net_take_home = round_money(base_salary - payg - medicare)

    logger.info(
        "FTE conversion %s %s/%s over %d days: base salary %s (multiplier %s)",
        fte_input.state,
        fte_input.rate,
        fte_input.rate_type,
        effective_days,
        result.base_salary,
        result.multiplier,
    )
    return result
