"""Australian tax constants — marginal brackets and HECS/HELP repayment tiers.

Hardcoded Python constants from the ATO rate tables. Years that repeat an
earlier year's rates are declared as aliases and copied when the tables are
built, so every key maps to a concrete bracket tuple.

Source: ATO individual income tax rates and study-loan repayment thresholds.
"""

import logging
from decimal import Decimal
from enum import StrEnum
from typing import NamedTuple

from aupay.calculators.errors import DataError
from aupay.calculators.financial_year import financial_year_key, start_year_of

logger = logging.getLogger(__name__)


class TaxBracket(NamedTuple):
    """A single marginal income tax bracket."""

    lower: Decimal  # inclusive
    upper: Decimal | None  # exclusive, None = no cap
    base_tax: Decimal  # tax on all income below `lower`
    rate: Decimal


class HelpBracket(NamedTuple):
    """A HECS/HELP repayment tier; the rate applies to the whole income."""

    lower: Decimal  # inclusive
    upper: Decimal | None  # exclusive, None = no cap
    rate: Decimal


class TableKind(StrEnum):
    RESIDENT = "resident"
    NON_RESIDENT = "non-resident"
    HELP = "help"


def _tax_brackets(*rows: tuple[int, int | None, int, str]) -> tuple[TaxBracket, ...]:
    return tuple(
        TaxBracket(
            Decimal(lower),
            Decimal(upper) if upper is not None else None,
            Decimal(base),
            Decimal(rate),
        )
        for lower, upper, base, rate in rows
    )


def _help_brackets(*rows: tuple[int, int | None, str]) -> tuple[HelpBracket, ...]:
    return tuple(
        HelpBracket(Decimal(lower), Decimal(upper) if upper is not None else None, Decimal(rate))
        for lower, upper, rate in rows
    )


_RESIDENT_2019 = _tax_brackets(
    (0, 18200, 0, "0"),
    (18200, 37000, 0, "0.19"),
    (37000, 90000, 3572, "0.325"),
    (90000, 180000, 20797, "0.37"),
    (180000, None, 54097, "0.45"),
)

# Stage 2 (2020-21 through 2023-24)
_RESIDENT_2020 = _tax_brackets(
    (0, 18200, 0, "0"),
    (18200, 45000, 0, "0.19"),
    (45000, 120000, 5092, "0.325"),
    (120000, 180000, 29467, "0.37"),
    (180000, None, 51667, "0.45"),
)

# Stage 3 (2024-25 onwards)
_RESIDENT_2024 = _tax_brackets(
    (0, 18200, 0, "0"),
    (18200, 45000, 0, "0.16"),
    (45000, 135000, 4288, "0.30"),
    (135000, 190000, 31288, "0.37"),
    (190000, None, 51638, "0.45"),
)

_NON_RESIDENT_2019 = _tax_brackets(
    (0, 90000, 0, "0.325"),
    (90000, 180000, 29250, "0.37"),
    (180000, None, 62550, "0.45"),
)

_NON_RESIDENT_2020 = _tax_brackets(
    (0, 120000, 0, "0.325"),
    (120000, 180000, 39000, "0.37"),
    (180000, None, 61200, "0.45"),
)

_NON_RESIDENT_2024 = _tax_brackets(
    (0, 135000, 0, "0.30"),
    (135000, 190000, 40500, "0.37"),
    (190000, None, 60850, "0.45"),
)

_HELP_2023 = _help_brackets(
    (0, 51550, "0"),
    (51550, 59519, "0.01"),
    (59519, 63090, "0.02"),
    (63090, 66876, "0.025"),
    (66876, 70889, "0.03"),
    (70889, 75141, "0.035"),
    (75141, 79650, "0.04"),
    (79650, 84430, "0.045"),
    (84430, 89495, "0.05"),
    (89495, 94866, "0.055"),
    (94866, 100558, "0.06"),
    (100558, 106591, "0.065"),
    (106591, 112986, "0.07"),
    (112986, 119765, "0.075"),
    (119765, 126951, "0.08"),
    (126951, 134569, "0.085"),
    (134569, 142643, "0.09"),
    (142643, 151201, "0.095"),
    (151201, None, "0.10"),
)

_HELP_2024 = _help_brackets(
    (0, 54435, "0"),
    (54435, 62188, "0.01"),
    (62188, 65776, "0.02"),
    (65776, 69591, "0.025"),
    (69591, 73748, "0.03"),
    (73748, 78172, "0.035"),
    (78172, 82884, "0.04"),
    (82884, 87903, "0.045"),
    (87903, 93249, "0.05"),
    (93249, 98935, "0.055"),
    (98935, 104962, "0.06"),
    (104962, 111359, "0.065"),
    (111359, 118146, "0.07"),
    (118146, 125344, "0.075"),
    (125344, 132972, "0.08"),
    (132972, 141056, "0.085"),
    (141056, 149611, "0.09"),
    (149611, 158660, "0.095"),
    (158660, None, "0.10"),
)

# Years whose rates are identical to another year's.
_ALIASES: dict[str, str] = {
    "2021-22": "2020-21",
    "2022-23": "2020-21",
    "2023-24": "2020-21",
    "2025-26": "2024-25",
}


def _with_aliases(table: dict[str, tuple], aliases: dict[str, str]) -> dict[str, tuple]:
    """Copy aliased years into the table and return it ordered by year."""
    resolved = dict(table)
    for year, same_as in aliases.items():
        if year not in resolved and same_as in resolved:
            resolved[year] = resolved[same_as]
    return dict(sorted(resolved.items(), key=lambda item: start_year_of(item[0])))


RESIDENT_BRACKETS: dict[str, tuple[TaxBracket, ...]] = _with_aliases(
    {
        "2019-20": _RESIDENT_2019,
        "2020-21": _RESIDENT_2020,
        "2024-25": _RESIDENT_2024,
    },
    _ALIASES,
)

NON_RESIDENT_BRACKETS: dict[str, tuple[TaxBracket, ...]] = _with_aliases(
    {
        "2019-20": _NON_RESIDENT_2019,
        "2020-21": _NON_RESIDENT_2020,
        "2024-25": _NON_RESIDENT_2024,
    },
    _ALIASES,
)

# 2025-26 moved to marginal repayments and is not a flat-tier table.
HELP_BRACKETS: dict[str, tuple[HelpBracket, ...]] = {
    "2023-24": _HELP_2023,
    "2024-25": _HELP_2024,
}


class BracketStore:
    """Read-only lookup over per-year bracket tables.

    A year missing from a table falls back to the nearest year present in
    that same table, measured on the starting calendar year. Equidistant
    candidates resolve to the earlier year. Every fallback is logged at
    WARNING level.
    """

    def __init__(
        self,
        resident: dict[str, tuple[TaxBracket, ...]] | None = None,
        non_resident: dict[str, tuple[TaxBracket, ...]] | None = None,
        help_tiers: dict[str, tuple[HelpBracket, ...]] | None = None,
    ) -> None:
        self._tables: dict[TableKind, dict[str, tuple]] = {
            TableKind.RESIDENT: dict(RESIDENT_BRACKETS if resident is None else resident),
            TableKind.NON_RESIDENT: dict(
                NON_RESIDENT_BRACKETS if non_resident is None else non_resident
            ),
            TableKind.HELP: dict(HELP_BRACKETS if help_tiers is None else help_tiers),
        }

    def available_years(self, kind: TableKind = TableKind.RESIDENT) -> list[str]:
        return sorted(self._tables[kind], key=start_year_of)

    def resolve_financial_year(
        self, financial_year: str, kind: TableKind = TableKind.RESIDENT
    ) -> str:
        """Return the year whose table will be used for ``financial_year``.

        Raises:
            DataError: If the table holds no years at all.
        """
        table = self._tables[kind]
        if financial_year in table:
            return financial_year
        if not table:
            raise DataError(kind.value)

        target = start_year_of(financial_year)
        candidates = sorted(start_year_of(fy) for fy in table)
        nearest = financial_year_key(min(candidates, key=lambda year: abs(year - target)))
        logger.warning(
            "No %s data for FY %s; using %s instead.", kind.value, financial_year, nearest
        )
        return nearest

    def get_brackets(self, financial_year: str, is_resident: bool = True) -> list[TaxBracket]:
        kind = TableKind.RESIDENT if is_resident else TableKind.NON_RESIDENT
        resolved = self.resolve_financial_year(financial_year, kind)
        return list(self._tables[kind][resolved])

    def get_help_brackets(self, financial_year: str) -> list[HelpBracket]:
        resolved = self.resolve_financial_year(financial_year, TableKind.HELP)
        return list(self._tables[TableKind.HELP][resolved])


DEFAULT_STORE = BracketStore()

DEFAULT_FINANCIAL_YEAR = "2025-26"


def get_brackets(financial_year: str, is_resident: bool = True) -> list[TaxBracket]:
    """Marginal brackets for a financial year, from the default store."""
    return DEFAULT_STORE.get_brackets(financial_year, is_resident)


def get_help_brackets(financial_year: str) -> list[HelpBracket]:
    """HECS/HELP repayment tiers for a financial year, from the default store."""
    return DEFAULT_STORE.get_help_brackets(financial_year)
