"""
Sales Analytics Module

Pure analytical operations over the gold-layer star schema. Every operation
reads polars DataFrames and returns a new DataFrame; inputs are never modified.
"""
from .contribution import category_contribution
from .cumulative import cumulative_sales
from .exceptions import (
    AnalyticsError,
    InvalidGranularityError,
    MissingColumnsError,
    ZeroOverallSalesError,
)
from .performance import yearly_product_performance
from .schema import Granularity
from .segmentation import (
    SegmentRule,
    classify,
    customer_spending,
    product_cost_segments,
    segment_customers,
    segment_products_by_cost,
)
from .trends import sales_by_period

__all__ = [
    "AnalyticsError",
    "InvalidGranularityError",
    "MissingColumnsError",
    "ZeroOverallSalesError",
    "Granularity",
    "sales_by_period",
    "cumulative_sales",
    "yearly_product_performance",
    "SegmentRule",
    "classify",
    "product_cost_segments",
    "segment_products_by_cost",
    "customer_spending",
    "segment_customers",
    "category_contribution",
]
