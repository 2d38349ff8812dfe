"""
Test Suite Configuration
"""
from datetime import date

import pytest
import polars as pl

from src.config import Settings


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(APP_ENV="testing")


@pytest.fixture
def sample_sales_df() -> pl.DataFrame:
    """
    Sales fact rows covering three years.

    Includes one undated row (customer 3) and one row whose product_key (99)
    has no product dimension entry.
    """
    return pl.DataFrame({
        "order_date": [
            date(2012, 3, 10),
            date(2013, 1, 15),
            date(2013, 2, 20),
            date(2013, 2, 25),
            date(2014, 4, 1),
            None,
            date(2014, 6, 1),
        ],
        "customer_key": [1, 1, 2, 2, 1, 3, 3],
        "product_key": [1, 2, 3, 1, 1, 2, 99],
        "sales_amount": [3000, 100, 200, 2400, 3000, 50, 400],
        "quantity": [1, 1, 2, 1, 1, 1, 2],
        "price": [3000, 100, 100, 2400, 3000, 50, 200],
    })


@pytest.fixture
def sample_products_df() -> pl.DataFrame:
    """Product dimension; one product has no cost"""
    return pl.DataFrame({
        "product_key": [1, 2, 3, 4],
        "product_name": ["Mountain-100 Black", "Road Tire", "Water Bottle", "Classic Vest"],
        "category": ["Bikes", "Components", "Accessories", "Clothing"],
        "cost": [1898.0, 500.0, 2.0, None],
    })


@pytest.fixture
def sample_customers_df() -> pl.DataFrame:
    """Customer dimension; customer 4 never ordered"""
    return pl.DataFrame({
        "customer_key": [1, 2, 3, 4],
    })


@pytest.fixture
def empty_sales_df() -> pl.DataFrame:
    """Sales fact with the gold schema and no rows"""
    return pl.DataFrame(schema={
        "order_date": pl.Date,
        "customer_key": pl.Int64,
        "product_key": pl.Int64,
        "sales_amount": pl.Int64,
        "quantity": pl.Int64,
        "price": pl.Int64,
    })
