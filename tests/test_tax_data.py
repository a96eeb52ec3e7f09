"""Tests for the bracket tables and the year-fallback lookup."""

import logging
from decimal import Decimal

import pytest

from aupay.calculators.errors import DataError
from aupay.calculators.tax_data import (
    DEFAULT_STORE,
    HELP_BRACKETS,
    NON_RESIDENT_BRACKETS,
    RESIDENT_BRACKETS,
    BracketStore,
    TableKind,
    get_brackets,
    get_help_brackets,
)

_ALL_TAX_TABLES = [
    pytest.param(fy, brackets, id=f"{kind}-{fy}")
    for kind, table in (("resident", RESIDENT_BRACKETS), ("non-resident", NON_RESIDENT_BRACKETS))
    for fy, brackets in table.items()
]


class TestTableShape:
    @pytest.mark.parametrize(("fy", "brackets"), _ALL_TAX_TABLES)
    def test_tax_brackets_contiguous_and_continuous(self, fy, brackets) -> None:
        """Each bracket starts where the last ended and base_tax carries the running total."""
        assert brackets[0].lower == 0
        assert brackets[0].base_tax == 0
        assert brackets[-1].upper is None
        for lower, upper in zip(brackets, brackets[1:]):
            assert lower.upper == upper.lower
            assert upper.base_tax == lower.base_tax + (lower.upper - lower.lower) * lower.rate

    @pytest.mark.parametrize("fy", sorted(HELP_BRACKETS))
    def test_help_tiers_contiguous_and_rising(self, fy: str) -> None:
        tiers = HELP_BRACKETS[fy]
        assert tiers[0].lower == 0
        assert tiers[0].rate == 0
        assert tiers[-1].upper is None
        for lower, upper in zip(tiers, tiers[1:]):
            assert lower.upper == upper.lower
            assert upper.rate > lower.rate

    def test_resident_years(self) -> None:
        assert DEFAULT_STORE.available_years(TableKind.RESIDENT) == [
            "2019-20",
            "2020-21",
            "2021-22",
            "2022-23",
            "2023-24",
            "2024-25",
            "2025-26",
        ]

    def test_aliased_years_match_source_year(self) -> None:
        """2021-22 to 2023-24 repeat 2020-21; 2025-26 repeats 2024-25."""
        for fy in ("2021-22", "2022-23", "2023-24"):
            assert get_brackets(fy) == get_brackets("2020-21")
            assert get_brackets(fy, is_resident=False) == get_brackets("2020-21", is_resident=False)
        assert get_brackets("2025-26") == get_brackets("2024-25")


class TestDefensiveCopies:
    def test_mutating_returned_brackets_does_not_affect_store(self) -> None:
        brackets = get_brackets("2024-25")
        original_len = len(brackets)
        brackets.clear()
        assert len(get_brackets("2024-25")) == original_len

    def test_mutating_returned_help_tiers_does_not_affect_store(self) -> None:
        tiers = get_help_brackets("2024-25")
        tiers.pop()
        assert get_help_brackets("2024-25")[-1].upper is None

    def test_brackets_are_immutable(self) -> None:
        bracket = get_brackets("2024-25")[1]
        with pytest.raises(AttributeError):
            bracket.rate = Decimal("0.99")  # type: ignore[misc]


class TestYearFallback:
    def test_future_year_uses_latest(self, store_to_2024: BracketStore, caplog) -> None:
        """2030-31 with data only through 2024-25 falls back without raising."""
        with caplog.at_level(logging.WARNING, logger="aupay.calculators.tax_data"):
            brackets = store_to_2024.get_brackets("2030-31")

        assert brackets == list(RESIDENT_BRACKETS["2024-25"])
        assert "2030-31" in caplog.text
        assert "2024-25" in caplog.text

    def test_resolve_reports_fallback_year(self, store_to_2024: BracketStore) -> None:
        assert store_to_2024.resolve_financial_year("2030-31") == "2024-25"
        assert store_to_2024.resolve_financial_year("2024-25") == "2024-25"

    def test_early_year_uses_earliest(self) -> None:
        assert DEFAULT_STORE.resolve_financial_year("2010-11") == "2019-20"

    def test_present_year_does_not_warn(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            get_brackets("2024-25")
        assert caplog.records == []

    def test_equidistant_years_resolve_to_earlier(self) -> None:
        store = BracketStore(
            resident={
                "2020-21": RESIDENT_BRACKETS["2020-21"],
                "2024-25": RESIDENT_BRACKETS["2024-25"],
            },
        )
        assert store.resolve_financial_year("2022-23") == "2020-21"

    def test_help_fallback_uses_help_years(self) -> None:
        """HELP has its own year range, independent of the tax tables."""
        assert DEFAULT_STORE.resolve_financial_year("2019-20", TableKind.HELP) == "2023-24"
        assert DEFAULT_STORE.resolve_financial_year("2027-28", TableKind.HELP) == "2024-25"

    def test_empty_table_raises(self) -> None:
        store = BracketStore(resident={})
        with pytest.raises(DataError):
            store.get_brackets("2024-25")
