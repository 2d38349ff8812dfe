"""
Time-Trend Aggregator

Sales, distinct customers and quantity per month or year.
"""

from typing import Optional, Union

import polars as pl
import structlog

from src.config import get_settings
from .schema import FACT_SALES, Granularity, dated_sales, period_start, require_columns

logger = structlog.get_logger(__name__)
settings = get_settings()

TREND_COLUMNS = ["order_date", "customer_key", "sales_amount", "quantity"]


def sales_by_period(
    sales: pl.DataFrame,
    granularity: Optional[Union[Granularity, str]] = None,
) -> pl.DataFrame:
    """
    Aggregate sales per truncated order date.

    Args:
        sales: Sales fact rows
        granularity: "month" or "year"; defaults to the configured granularity

    Returns:
        DataFrame with order_date, total_sales, total_customers and
        total_quantity, one row per period in ascending order
    """
    period = Granularity.parse(granularity or settings.analytics.default_granularity)
    require_columns(sales, TREND_COLUMNS, FACT_SALES)

    result = (
        dated_sales(sales)
        .group_by(period_start(period))
        .agg(
            pl.col("sales_amount").sum().alias("total_sales"),
            pl.col("customer_key").drop_nulls().n_unique().alias("total_customers"),
            pl.col("quantity").sum().alias("total_quantity"),
        )
        .sort("order_date")
    )

    logger.debug("Computed sales trend", granularity=period.value, periods=result.height)
    return result
