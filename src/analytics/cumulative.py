"""
Cumulative Analysis

Running sales total and cumulative average price across periods.
"""

from typing import Union

import polars as pl
import structlog

from .schema import FACT_SALES, Granularity, dated_sales, period_start, require_columns

logger = structlog.get_logger(__name__)

CUMULATIVE_COLUMNS = ["order_date", "sales_amount", "price"]


def cumulative_sales(
    sales: pl.DataFrame,
    granularity: Union[Granularity, str] = Granularity.YEAR,
) -> pl.DataFrame:
    """
    Per-period totals with running figures attached.

    running_total_sales is the prefix sum of total_sales. moving_average_price
    is the mean of every period's avg_price up to and including the current
    one, not a fixed-size window.

    Args:
        sales: Sales fact rows
        granularity: Period size, yearly by default

    Returns:
        DataFrame with order_date, total_sales, avg_price,
        running_total_sales and moving_average_price
    """
    period = Granularity.parse(granularity)
    require_columns(sales, CUMULATIVE_COLUMNS, FACT_SALES)

    per_period = (
        dated_sales(sales)
        .group_by(period_start(period))
        .agg(
            pl.col("sales_amount").sum().alias("total_sales"),
            pl.col("price").mean().alias("avg_price"),
        )
        .sort("order_date")
    )

    result = per_period.with_columns(
        pl.col("total_sales").cum_sum().alias("running_total_sales"),
        # years without a known price are skipped
        (pl.col("avg_price").cum_sum().forward_fill() / pl.col("avg_price").cum_count())
        .alias("moving_average_price"),
    )

    logger.debug("Computed cumulative sales", granularity=period.value, periods=result.height)
    return result
