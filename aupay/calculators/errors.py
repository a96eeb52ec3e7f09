"""Calculator error kinds."""


class CalculationError(Exception):
    """Base class for calculator failures."""


class InputError(CalculationError, ValueError):
    """Raised when a caller supplies an invalid value.

    Negative or non-finite money amounts, an end date before the start date,
    no chargeable days, or an out-of-range configuration value.
    """


class DataError(CalculationError, RuntimeError):
    """Raised when a statutory rate table is incomplete or empty."""

    def __init__(self, table: str, financial_year: str | None = None) -> None:
        self.table = table
        self.financial_year = financial_year
        if financial_year is None:
            message = f"No data in {table} table"
        else:
            message = f"Incomplete {table} table for FY {financial_year}"
        super().__init__(message)
