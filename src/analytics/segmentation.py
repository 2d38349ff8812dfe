"""
Data Segmentation

Groups products into cost ranges and customers into spending tiers.

Both classifications are an ordered list of rules evaluated first-match-wins
with a fallback label, so overlapping ranges resolve to the earliest rule:
a product costing exactly 500 is "100-500", never "500-1000".
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import polars as pl
import structlog

from src.config import get_settings
from .schema import DIM_CUSTOMERS, DIM_PRODUCTS, FACT_SALES, require_columns

logger = structlog.get_logger(__name__)
settings = get_settings()

VIP = "VIP"
REGULAR = "Regular"
NEW = "New"


@dataclass
class SegmentRule:
    """A segment label and the predicate a row must satisfy to get it"""
    label: str
    predicate: pl.Expr


def classify(rules: Sequence[SegmentRule], default: str) -> pl.Expr:
    """
    Label of the first rule whose predicate holds, else `default`.

    A predicate evaluating to null counts as not holding.
    """
    if not rules:
        return pl.lit(default)

    expr = pl.when(rules[0].predicate).then(pl.lit(rules[0].label))
    for rule in rules[1:]:
        expr = expr.when(rule.predicate).then(pl.lit(rule.label))
    return expr.otherwise(pl.lit(default))


def _bound_label(value: float) -> str:
    return f"{value:g}"


def cost_segment_rules(bounds: Optional[Sequence[float]] = None) -> Tuple[List[SegmentRule], str]:
    """
    Product cost rules and fallback label.

    With the default bounds (100, 500, 1000) the segments are
    "Below 100", "100-500", "500-1000" and the fallback "Above 1000".
    """
    low, mid, high = bounds or settings.analytics.cost_segment_bounds
    cost = pl.col("cost")
    rules = [
        SegmentRule(f"Below {_bound_label(low)}", cost < low),
        SegmentRule(f"{_bound_label(low)}-{_bound_label(mid)}", cost.is_between(low, mid)),
        SegmentRule(f"{_bound_label(mid)}-{_bound_label(high)}", cost.is_between(mid, high)),
    ]
    return rules, f"Above {_bound_label(high)}"


def customer_segment_rules(
    min_lifespan_months: Optional[int] = None,
    spending_threshold: Optional[float] = None,
) -> Tuple[List[SegmentRule], str]:
    """Customer rules and fallback label ("New")"""
    if min_lifespan_months is None:
        min_lifespan_months = settings.analytics.vip_min_lifespan_months
    if spending_threshold is None:
        spending_threshold = settings.analytics.vip_spending_threshold

    established = pl.col("lifespan") >= min_lifespan_months
    rules = [
        SegmentRule(VIP, established & (pl.col("total_spending") > spending_threshold)),
        SegmentRule(REGULAR, established & (pl.col("total_spending") <= spending_threshold)),
    ]
    return rules, NEW


def _count_by(df: pl.DataFrame, segment: str, count_name: str) -> pl.DataFrame:
    return (
        df.group_by(segment)
        .agg(pl.len().cast(pl.Int64).alias(count_name))
        .sort([count_name, segment], descending=[True, False])
    )


# =============================================================================
# PRODUCTS
# =============================================================================

def product_cost_segments(
    products: pl.DataFrame,
    bounds: Optional[Sequence[float]] = None,
) -> pl.DataFrame:
    """Every product with its cost_range label"""
    require_columns(products, ["product_key", "product_name", "cost"], DIM_PRODUCTS)
    rules, default = cost_segment_rules(bounds)

    return products.select(
        "product_key",
        "product_name",
        "cost",
        classify(rules, default).alias("cost_range"),
    )


def segment_products_by_cost(
    products: pl.DataFrame,
    bounds: Optional[Sequence[float]] = None,
) -> pl.DataFrame:
    """
    Number of products per cost range.

    Returns:
        DataFrame with cost_range and total_products, largest segment first
    """
    segments = product_cost_segments(products, bounds)
    result = _count_by(segments, "cost_range", "total_products")

    logger.debug("Segmented products by cost", products=segments.height, segments=result.height)
    return result


# =============================================================================
# CUSTOMERS
# =============================================================================

def _months_between(start: str, end: str) -> pl.Expr:
    # calendar month boundaries crossed; day of month is ignored
    return (
        (pl.col(end).dt.year().cast(pl.Int64) * 12 + pl.col(end).dt.month().cast(pl.Int64))
        - (pl.col(start).dt.year().cast(pl.Int64) * 12 + pl.col(start).dt.month().cast(pl.Int64))
    )


def customer_spending(
    sales: pl.DataFrame,
    customers: Optional[pl.DataFrame] = None,
    min_lifespan_months: Optional[int] = None,
    spending_threshold: Optional[float] = None,
) -> pl.DataFrame:
    """
    Spending history and segment per customer.

    When the customer dimension is given every dimension customer is
    reported; those without sales get zero spending, zero lifespan and
    null order dates, and are classified "New". Customers that only appear
    in the sales facts are reported and segmented as well.

    Args:
        sales: Sales fact rows
        customers: Optional customer dimension rows
        min_lifespan_months: Lifespan gate for VIP/Regular
        spending_threshold: Spending above which an established customer is VIP

    Returns:
        DataFrame with customer_key, total_spending, first_order, last_order,
        lifespan and customer_segment
    """
    require_columns(sales, ["order_date", "customer_key", "sales_amount"], FACT_SALES)

    per_customer = sales.group_by("customer_key").agg(
        pl.col("sales_amount").sum().alias("total_spending"),
        pl.col("order_date").min().alias("first_order"),
        pl.col("order_date").max().alias("last_order"),
    )

    if customers is not None:
        require_columns(customers, ["customer_key"], DIM_CUSTOMERS)
        orphans = per_customer.join(customers.select("customer_key"), on="customer_key", how="anti").height
        if orphans:
            logger.warning("Sales from customers missing in dimension", orphans=orphans)
        # dimension customers without sales and fact customers without a
        # dimension row are both kept
        per_customer = (
            customers.select("customer_key")
            .unique()
            .join(per_customer, on="customer_key", how="full", coalesce=True)
        )

    rules, default = customer_segment_rules(min_lifespan_months, spending_threshold)

    result = (
        per_customer.with_columns(
            pl.col("total_spending").fill_null(0),
            _months_between("first_order", "last_order").fill_null(0).alias("lifespan"),
        )
        .with_columns(classify(rules, default).alias("customer_segment"))
        .select(
            "customer_key",
            "total_spending",
            "first_order",
            "last_order",
            "lifespan",
            "customer_segment",
        )
        .sort("customer_key")
    )
    return result


def segment_customers(
    sales: pl.DataFrame,
    customers: Optional[pl.DataFrame] = None,
    min_lifespan_months: Optional[int] = None,
    spending_threshold: Optional[float] = None,
) -> pl.DataFrame:
    """
    Number of customers per segment (VIP, Regular, New).

    Returns:
        DataFrame with customer_segment and total_customers, largest first
    """
    spending = customer_spending(sales, customers, min_lifespan_months, spending_threshold)
    result = _count_by(spending, "customer_segment", "total_customers")

    logger.debug("Segmented customers", customers=spending.height, segments=result.height)
    return result
