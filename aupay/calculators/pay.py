"""Contract pay calculator — invoice, GST and deduction breakdown."""

from decimal import Decimal

from pydantic import BaseModel

from aupay.calculators.errors import InputError
from aupay.calculators.money import Money, as_amount


class PayBreakdown(BaseModel):
    """Invoice and take-home figures for a block of working days."""

    working_days: int
    income_ex_gst: Money
    gst_amount: Money
    income_inc_gst: Money
    tax_amount: Money
    super_amount: Money
    hecs_amount: Money
    net_amount: Money


def calculate_pay(
    daily_rate: Decimal | int | float,
    working_days: int,
    gst_rate: Decimal | int | float,
    tax_rate: Decimal | int | float,
    super_rate: Decimal | int | float = 0,
    hecs_rate: Decimal | int | float = 0,
) -> PayBreakdown:
    """Break down pay for ``working_days`` at ``daily_rate``.

    GST is added on top of the ex-GST income. Tax, super and HECS are each
    taken from the ex-GST income. Amounts are unrounded.
    """
    if working_days < 0:
        raise InputError("Working days must be non-negative.")

    income = as_amount(daily_rate, "Daily rate") * working_days
    gst = income * as_amount(gst_rate, "GST rate")
    tax = income * as_amount(tax_rate, "Tax rate")
    super_amount = income * as_amount(super_rate, "Super rate")
    hecs = income * as_amount(hecs_rate, "HECS rate")

    return PayBreakdown(
        working_days=working_days,
        income_ex_gst=income,
        gst_amount=gst,
        income_inc_gst=income + gst,
        tax_amount=tax,
        super_amount=super_amount,
        hecs_amount=hecs,
        net_amount=income - tax - super_amount - hecs,
    )
