"""API routes for the contractor pay calculators."""

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Request

from aupay.calculators.errors import InputError
from aupay.calculators.financial_year import period_segments
from aupay.calculators.fte import FteConstants, FteInput, FteResult, Jurisdiction, convert
from aupay.calculators.help_repayment import assemble_repayment_income, calculate_help_repayment
from aupay.calculators.income_tax import calculate_tax, calculate_tax_for_period, tax_breakdown
from aupay.calculators.pay import PayBreakdown, calculate_pay
from aupay.calculators.tax_data import BracketStore, TableKind
from aupay.holidays import HolidayService, count_working_days
from aupay.models import (
    FteRequest,
    HelpRequest,
    PayRequest,
    PeriodTaxRequest,
    PeriodTaxResponse,
    Segment,
    TaxRequest,
    WorkingDaysResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _store(request: Request) -> BracketStore:
    return request.app.state.store


def _constants(request: Request) -> FteConstants:
    return request.app.state.fte_constants


def _holidays(request: Request) -> HolidayService:
    return request.app.state.holidays


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/financial-years")
async def financial_years(request: Request) -> dict[str, list[str]]:
    """Financial years with rate tables, per table."""
    store = _store(request)
    return {kind.value: store.available_years(kind) for kind in TableKind}


@router.post("/tax")
async def tax(body: TaxRequest, request: Request) -> dict[str, Any]:
    """Full-year income tax with a per-bracket breakdown."""
    return tax_breakdown(body.income, body.financial_year, body.is_resident, _store(request))


@router.post("/tax/period", response_model=PeriodTaxResponse)
async def tax_for_period(body: PeriodTaxRequest, request: Request) -> PeriodTaxResponse:
    """Tax on an annual salary earned over a date range."""
    store = _store(request)
    total = calculate_tax_for_period(
        body.start_date, body.end_date, body.annual_salary, body.is_resident, store
    )

    segments: list[Segment] = []
    for seg in period_segments(body.start_date, body.end_date):
        income = body.annual_salary * seg.days / seg.days_in_year
        segments.append(Segment(
            financial_year=seg.financial_year,
            start_date=seg.start,
            end_date=seg.end,
            days=seg.days,
            days_in_year=seg.days_in_year,
            income=income,
            tax=calculate_tax(income, seg.financial_year, body.is_resident, store),
        ))
    return PeriodTaxResponse(total_tax=total, segments=segments)


@router.post("/help")
async def help_repayment(body: HelpRequest, request: Request) -> dict[str, Any]:
    """HECS/HELP compulsory repayment for the assembled repayment income."""
    sg_rate = _constants(request).sg_rate if body.include_super_guarantee else None
    income = assemble_repayment_income(
        body.taxable_income,
        reportable_fringe_benefits=body.reportable_fringe_benefits,
        reportable_super_contributions=body.reportable_super_contributions,
        additional_reportable_super=body.additional_reportable_super,
        net_investment_losses=body.net_investment_losses,
        super_guarantee_rate=sg_rate,
    )
    return calculate_help_repayment(income, body.financial_year, _store(request))


@router.get("/fte/constants")
async def fte_constants(request: Request) -> FteConstants:
    """Rates currently applied by the FTE conversion."""
    return _constants(request)


@router.post("/fte", response_model=FteResult)
async def fte(body: FteRequest, request: Request) -> FteResult:
    """Convert a contract rate into an equivalent permanent salary package."""
    working_days = body.working_days
    if working_days is None:
        working_days = await count_working_days(
            body.start_date, body.end_date, body.state, _holidays(request)
        )

    fte_input = FteInput(
        rate=body.rate,
        rate_type=body.rate_type,
        start_date=body.start_date,
        end_date=body.end_date,
        working_days=working_days,
        holiday_days=body.holiday_days,
        furlough_days=body.furlough_days,
        hours_per_day=body.hours_per_day,
        state=body.state,
    )
    return convert(
        fte_input,
        include_tax_estimate=body.include_tax_estimate,
        constants=_constants(request),
        store=_store(request),
    )


@router.post("/pay", response_model=PayBreakdown)
async def pay(body: PayRequest, request: Request) -> PayBreakdown:
    """Invoice, GST and net pay for a block of working days."""
    working_days = body.working_days
    if working_days is None:
        if body.start_date is None or body.end_date is None or body.state is None:
            raise InputError("Provide working_days or start_date, end_date and state.")
        working_days = await count_working_days(
            body.start_date, body.end_date, body.state, _holidays(request)
        )

    gst_rate = body.gst_rate if body.gst_rate is not None else _constants(request).gst_rate
    return calculate_pay(
        body.daily_rate,
        working_days,
        gst_rate=gst_rate,
        tax_rate=body.tax_rate,
        super_rate=body.super_rate,
        hecs_rate=body.hecs_rate,
    )


@router.get("/working-days", response_model=WorkingDaysResponse)
async def working_days(
    start_date: date, end_date: date, state: Jurisdiction, request: Request
) -> WorkingDaysResponse:
    """Weekdays in the inclusive range, less the state's public holidays."""
    count = await count_working_days(start_date, end_date, state, _holidays(request))
    return WorkingDaysResponse(
        start_date=start_date, end_date=end_date, state=state, working_days=count
    )
