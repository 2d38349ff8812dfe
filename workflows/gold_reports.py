"""
Prefect Workflow Orchestration - Gold Layer Reports

Runs every analytical report over the gold tables:
- Table loading
- Input quality checks
- Trend, cumulative, performance, segmentation and part-to-whole reports
"""

from typing import Dict, Optional

import polars as pl
from prefect import flow, task, get_run_logger
from prefect.cache_policies import NO_CACHE

from src.analytics import (
    category_contribution,
    cumulative_sales,
    sales_by_period,
    segment_customers,
    segment_products_by_cost,
    yearly_product_performance,
)
from src.config import get_settings
from src.config.logging import bind_report_context, clear_report_context, configure_logging
from src.ingestion.gold_loader import GoldTableLoader, GoldTables
from src.quality.validators import (
    create_customers_validator,
    create_products_validator,
    create_sales_validator,
)

settings = get_settings()


# =============================================================================
# TASKS
# =============================================================================

@task(
    name="load_gold_tables",
    description="Load sales fact and dimension tables",
    retries=2,
    retry_delay_seconds=10,
)
def load_gold_tables(gold_path: str, file_format: Optional[str] = None) -> GoldTables:
    """Load the gold tables from disk"""
    logger = get_run_logger()

    tables = GoldTableLoader(file_format).load_all(gold_path)

    logger.info(
        f"Loaded gold tables: {len(tables.fact_sales)} sales, "
        f"{len(tables.dim_products)} products, {len(tables.dim_customers)} customers"
    )
    return tables


@task(
    name="validate_gold_tables",
    description="Run input quality checks on the gold tables",
    cache_policy=NO_CACHE,
)
def validate_gold_tables(tables: GoldTables) -> dict:
    """Validate gold tables; failures are reported, not fatal"""
    logger = get_run_logger()

    suites = {
        "fact_sales": (
            create_sales_validator(tables.dim_products, tables.dim_customers),
            tables.fact_sales,
        ),
        "dim_products": (create_products_validator(), tables.dim_products),
        "dim_customers": (create_customers_validator(), tables.dim_customers),
    }

    summary = {}
    for name, (validator, df) in suites.items():
        result = validator.validate(df)
        summary[name] = {
            "status": result.status.value,
            "passed_checks": result.passed_checks,
            "total_checks": result.total_checks,
            "success_rate": result.success_rate,
        }
        logger.info(
            f"Validation {name} {result.status.value}: "
            f"{result.passed_checks}/{result.total_checks} checks passed"
        )

    return summary


@task(name="sales_trend_report", cache_policy=NO_CACHE)
def sales_trend_report(tables: GoldTables, granularity: str) -> pl.DataFrame:
    return sales_by_period(tables.fact_sales, granularity)


@task(name="cumulative_report", cache_policy=NO_CACHE)
def cumulative_report(tables: GoldTables) -> pl.DataFrame:
    return cumulative_sales(tables.fact_sales)


@task(name="product_performance_report", cache_policy=NO_CACHE)
def product_performance_report(tables: GoldTables) -> pl.DataFrame:
    return yearly_product_performance(tables.fact_sales, tables.dim_products)


@task(name="segmentation_reports", cache_policy=NO_CACHE)
def segmentation_reports(tables: GoldTables) -> Dict[str, pl.DataFrame]:
    return {
        "product_cost_segments": segment_products_by_cost(tables.dim_products),
        "customer_segments": segment_customers(tables.fact_sales, tables.dim_customers),
    }


@task(name="category_contribution_report", cache_policy=NO_CACHE)
def category_contribution_report(tables: GoldTables) -> pl.DataFrame:
    return category_contribution(tables.fact_sales, tables.dim_products)


# =============================================================================
# FLOWS
# =============================================================================

@flow(
    name="gold_analytics_reports",
    description="Analytical reports over the gold-layer star schema",
)
def gold_analytics_reports(
    gold_path: Optional[str] = None,
    granularity: Optional[str] = None,
    file_format: Optional[str] = None,
) -> Dict[str, pl.DataFrame]:
    """
    Gold analytics report flow.

    Steps:
    1. Load gold tables
    2. Validate inputs
    3. Compute every report
    """
    logger = get_run_logger()

    gold_path = gold_path or settings.data_lake.gold_path
    granularity = granularity or settings.analytics.default_granularity

    logger.info(f"Starting gold reports from {gold_path} ({granularity} trend)")
    bind_report_context(environment=settings.app_env, gold_path=str(gold_path), granularity=granularity)

    try:
        tables = load_gold_tables(gold_path, file_format)
        validate_gold_tables(tables)

        reports = {
            "sales_trend": sales_trend_report(tables, granularity),
            "cumulative_sales": cumulative_report(tables),
            "product_performance": product_performance_report(tables),
            **segmentation_reports(tables),
        }

        try:
            reports["category_contribution"] = category_contribution_report(tables)
        except ZeroDivisionError as e:
            logger.error(f"Category contribution failed: {e}")
            raise
    finally:
        clear_report_context()

    for name, df in reports.items():
        logger.info(f"Report {name}: {len(df)} rows")

    return reports


if __name__ == "__main__":
    configure_logging()
    gold_analytics_reports()
