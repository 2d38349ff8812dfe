"""
Part-to-Whole Analysis

Share of overall sales contributed by each product category.
"""

from typing import Optional

import polars as pl
import structlog

from src.config import get_settings
from .exceptions import ZeroOverallSalesError
from .schema import DIM_PRODUCTS, FACT_SALES, left_join_dimension, require_columns

logger = structlog.get_logger(__name__)
settings = get_settings()


def category_contribution(
    sales: pl.DataFrame,
    products: pl.DataFrame,
    precision: Optional[int] = None,
) -> pl.DataFrame:
    """
    Sales per category and its percentage of overall sales.

    Sales with an unknown product_key count toward a null category rather
    than being dropped, so the categories always add up to overall_sales.

    Args:
        sales: Sales fact rows
        products: Product dimension rows
        precision: Decimals kept in percentage_of_total

    Returns:
        DataFrame with category, total_sales, overall_sales and
        percentage_of_total, largest category first

    Raises:
        ZeroOverallSalesError: If overall sales sum to zero
    """
    if precision is None:
        precision = settings.analytics.percentage_precision
    require_columns(sales, ["product_key", "sales_amount"], FACT_SALES)
    require_columns(products, ["product_key", "category"], DIM_PRODUCTS)

    by_category = (
        left_join_dimension(sales, products, "product_key", ["category"], DIM_PRODUCTS)
        .group_by("category")
        .agg(pl.col("sales_amount").sum().alias("total_sales"))
    )

    overall_sales = by_category["total_sales"].sum()
    if not overall_sales:
        raise ZeroOverallSalesError(overall_sales or 0)

    result = (
        by_category.with_columns(
            pl.col("total_sales").sum().alias("overall_sales"),
        )
        .with_columns(
            (pl.col("total_sales").cast(pl.Float64) / pl.col("overall_sales") * 100)
            .round(precision)
            .alias("percentage_of_total"),
        )
        .sort(["total_sales", "category"], descending=[True, False], nulls_last=True)
    )

    logger.debug(
        "Computed category contribution",
        categories=result.height,
        overall_sales=overall_sales,
    )
    return result
