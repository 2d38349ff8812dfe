"""
Gold Table Schema

Column names of the star-schema gold tables and the shared helpers every
analytical operation uses to check and prepare its inputs.
"""

from enum import Enum
from typing import Iterable, Optional, Union

import polars as pl
import structlog

from .exceptions import InvalidGranularityError, MissingColumnsError

logger = structlog.get_logger(__name__)


FACT_SALES = "fact_sales"
DIM_PRODUCTS = "dim_products"
DIM_CUSTOMERS = "dim_customers"

FACT_SALES_COLUMNS = [
    "order_date",
    "customer_key",
    "product_key",
    "sales_amount",
    "quantity",
    "price",
]
DIM_PRODUCTS_COLUMNS = ["product_key", "product_name", "category", "cost"]
DIM_CUSTOMERS_COLUMNS = ["customer_key"]

TABLE_COLUMNS = {
    FACT_SALES: FACT_SALES_COLUMNS,
    DIM_PRODUCTS: DIM_PRODUCTS_COLUMNS,
    DIM_CUSTOMERS: DIM_CUSTOMERS_COLUMNS,
}


class Granularity(str, Enum):
    """Period an order date is truncated to"""
    MONTH = "month"
    YEAR = "year"

    @property
    def every(self) -> str:
        """Polars duration string for dt.truncate"""
        return {"month": "1mo", "year": "1y"}[self.value]

    @classmethod
    def parse(cls, value: Union["Granularity", str]) -> "Granularity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidGranularityError(value, [g.value for g in cls]) from None


def require_columns(df: pl.DataFrame, columns: Iterable[str], table: str) -> None:
    """Raise MissingColumnsError if any of `columns` is absent from `df`"""
    missing = set(columns) - set(df.columns)
    if missing:
        raise MissingColumnsError(table, missing)


def dated_sales(sales: pl.DataFrame) -> pl.DataFrame:
    """Sales rows with a known order date; undated rows are excluded"""
    dated = sales.filter(pl.col("order_date").is_not_null())
    dropped = sales.height - dated.height
    if dropped:
        logger.debug("Excluded undated sales rows", dropped=dropped, kept=dated.height)
    return dated


def period_start(granularity: Granularity, column: str = "order_date") -> pl.Expr:
    """Order date truncated to the start of its period"""
    return pl.col(column).dt.truncate(granularity.every).alias(column)


def left_join_dimension(
    sales: pl.DataFrame,
    dimension: pl.DataFrame,
    key: str,
    attributes: Iterable[str],
    table: Optional[str] = None,
) -> pl.DataFrame:
    """
    Attach dimension attributes to every sales row.

    Unmatched keys keep their sales row with null attributes.
    """
    attributes = list(attributes)
    joined = sales.join(
        dimension.select([key] + attributes),
        on=key,
        how="left",
    )
    unmatched = (
        sales.filter(pl.col(key).is_not_null())
        .join(dimension.select(key), on=key, how="anti")
        .height
    )
    if unmatched:
        logger.warning(
            "Sales rows without a matching dimension row",
            dimension=table or key,
            unmatched=unmatched,
        )
    return joined
