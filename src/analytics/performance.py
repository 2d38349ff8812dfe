"""
Product Performance Analysis

Yearly product sales compared against the product's own average and against
its previous year.
"""

import polars as pl
import structlog

from .schema import (
    DIM_PRODUCTS,
    FACT_SALES,
    dated_sales,
    left_join_dimension,
    require_columns,
)

logger = structlog.get_logger(__name__)

ABOVE_AVG = "Above Avg"
BELOW_AVG = "Below Avg"
AVG = "Avg"

INCREASE = "Increase"
DECREASE = "Decrease"
NO_CHANGE = "No Change"


def _sign_label(column: str, positive: str, negative: str, zero: str) -> pl.Expr:
    # null difference stays null
    return (
        pl.when(pl.col(column) > 0)
        .then(pl.lit(positive))
        .when(pl.col(column) < 0)
        .then(pl.lit(negative))
        .when(pl.col(column) == 0)
        .then(pl.lit(zero))
    )


def yearly_product_performance(
    sales: pl.DataFrame,
    products: pl.DataFrame,
) -> pl.DataFrame:
    """
    Year-over-year performance per product.

    Sales are left-joined to the product dimension, so rows with an unknown
    product_key are reported under a null product_name. Windowed figures are
    partitioned by product_name and ordered by year.

    Args:
        sales: Sales fact rows
        products: Product dimension rows

    Returns:
        DataFrame with order_year, product_name, current_sales, avg_sales,
        diff_avg, avg_change, py_sales, diff_py and py_change, ordered by
        product_name then order_year
    """
    require_columns(sales, ["order_date", "product_key", "sales_amount"], FACT_SALES)
    require_columns(products, ["product_key", "product_name"], DIM_PRODUCTS)

    joined = left_join_dimension(
        dated_sales(sales), products, "product_key", ["product_name"], DIM_PRODUCTS
    )

    yearly = (
        joined.group_by(
            pl.col("order_date").dt.year().alias("order_year"),
            "product_name",
        )
        .agg(pl.col("sales_amount").sum().alias("current_sales"))
        .sort(["product_name", "order_year"], nulls_last=False)
    )

    # Frame is sorted by year inside each product, so shift(1) is the prior year
    result = (
        yearly.with_columns(
            pl.col("current_sales").mean().over("product_name").alias("avg_sales"),
            pl.col("current_sales").shift(1).over("product_name").alias("py_sales"),
        )
        .with_columns(
            (pl.col("current_sales") - pl.col("avg_sales")).alias("diff_avg"),
            (pl.col("current_sales") - pl.col("py_sales")).alias("diff_py"),
        )
        .with_columns(
            _sign_label("diff_avg", ABOVE_AVG, BELOW_AVG, AVG).alias("avg_change"),
            _sign_label("diff_py", INCREASE, DECREASE, NO_CHANGE).alias("py_change"),
        )
        .select(
            "order_year",
            "product_name",
            "current_sales",
            "avg_sales",
            "diff_avg",
            "avg_change",
            "py_sales",
            "diff_py",
            "py_change",
        )
    )

    logger.debug(
        "Computed yearly product performance",
        rows=result.height,
        products=result["product_name"].n_unique(),
    )
    return result
