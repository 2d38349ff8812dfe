"""
Analytics Errors

Exceptions raised synchronously to callers of the analytical operations.
None of them are retried or recovered internally.
"""

from typing import Iterable


class AnalyticsError(Exception):
    """Base class for analytical query failures"""


class ZeroOverallSalesError(AnalyticsError, ZeroDivisionError):
    """Raised when a part-to-whole ratio has no whole to divide by"""

    def __init__(self, overall_sales: float = 0):
        self.overall_sales = overall_sales
        super().__init__(
            f"Cannot compute percentage of total: overall sales is {overall_sales}"
        )


class InvalidGranularityError(AnalyticsError, ValueError):
    """Raised for an unsupported period truncation"""

    def __init__(self, granularity: object, allowed: Iterable[str]):
        self.granularity = granularity
        self.allowed = list(allowed)
        super().__init__(
            f"Unsupported granularity {granularity!r}, expected one of: {self.allowed}"
        )


class MissingColumnsError(AnalyticsError, KeyError):
    """Raised when an input table lacks columns an operation reads"""

    def __init__(self, table: str, missing: Iterable[str]):
        self.table = table
        self.missing = sorted(missing)
        super().__init__(table, self.missing)

    def __str__(self) -> str:
        return f"Table '{self.table}' is missing columns: {', '.join(self.missing)}"
