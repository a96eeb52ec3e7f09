"""CLI script for converting a contract engagement into an FTE salary package.

Usage:
    # $800/day in NSW for the second half of 2025, working days looked up
    python scripts/fte_report.py --rate 800 --start 2025-07-01 --end 2025-12-31 --state NSW

    # Hourly rate with an explicit working-day count and two weeks' furlough
    python scripts/fte_report.py --rate 110 --rate-type hourly --start 2025-07-01 \
        --end 2026-06-30 --state VIC --working-days 250 --furlough-days 10

    # Include the PAYG / Medicare / take-home estimate
    python scripts/fte_report.py --rate 800 --start 2025-07-01 --end 2025-12-31 --state QLD --tax

    # Offline: use the bundled holiday table only
    python scripts/fte_report.py ... --offline
"""

import argparse
import asyncio
import json
import logging
from datetime import date
from decimal import Decimal

from aupay.calculators.errors import CalculationError
from aupay.calculators.fte import FteInput, Jurisdiction, RateType, convert
from aupay.holidays import HolidayService, count_working_days

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a contract rate to an FTE salary package")
    parser.add_argument("--rate", type=Decimal, required=True, help="Contract rate ex GST")
    parser.add_argument(
        "--rate-type",
        choices=[r.value for r in RateType],
        default=RateType.DAILY.value,
        help="Unit of --rate (default: daily)",
    )
    parser.add_argument("--start", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    parser.add_argument("--end", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    parser.add_argument("--state", choices=[j.value for j in Jurisdiction], required=True)
    parser.add_argument(
        "--working-days",
        type=int,
        help="Working days in the period (default: weekdays less public holidays)",
    )
    parser.add_argument("--holiday-days", type=int, default=0, help="Leave days taken")
    parser.add_argument("--furlough-days", type=int, default=0, help="Unpaid shutdown days")
    parser.add_argument("--hours-per-day", type=Decimal, help="Hours per day for hourly rates")
    parser.add_argument("--tax", action="store_true", help="Include PAYG and Medicare estimate")
    parser.add_argument("--offline", action="store_true", help="Skip the holiday API")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser.parse_args()


async def run(args: argparse.Namespace) -> dict:
    working_days = args.working_days
    if working_days is None:
        holidays = HolidayService(enabled=False if args.offline else None)
        working_days = await count_working_days(args.start, args.end, args.state, holidays)
        logger.info("Counted %d working days in %s", working_days, args.state)

    fte_input = FteInput(
        rate=args.rate,
        rate_type=RateType(args.rate_type),
        start_date=args.start,
        end_date=args.end,
        working_days=working_days,
        holiday_days=args.holiday_days,
        furlough_days=args.furlough_days,
        hours_per_day=args.hours_per_day,
        state=Jurisdiction(args.state),
    )
    result = convert(fte_input, include_tax_estimate=args.tax)
    return result.model_dump(mode="json", exclude_none=True)


def main() -> None:
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        report = asyncio.run(run(args))
    except CalculationError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc

    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
