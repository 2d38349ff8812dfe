"""
Gold Layer Sample Dataset Generator
Generates fact_sales, dim_products and dim_customers CSVs for local report runs
"""

import sys
from datetime import date, timedelta
from pathlib import Path

import numpy as np
import polars as pl
from faker import Faker

fake = Faker()
np.random.seed(42)
Faker.seed(42)

OUTPUT_DIR = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent.parent / "data" / "gold"
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

CATEGORIES = ["Bikes", "Components", "Clothing", "Accessories"]


# ==========================================
# CUSTOMERS
# ==========================================
def generate_customers(n=2000):
    print(f"Generating {n:,} customers...")

    df = pl.DataFrame({
        "customer_key": np.arange(1, n + 1),
        "customer_id": np.arange(11000, 11000 + n),
        "first_name": [fake.first_name() for _ in range(n)],
        "last_name": [fake.last_name() for _ in range(n)],
        "country": np.random.choice(["United States", "Australia", "Germany", "France", "Canada"], n),
    })

    df.write_csv(OUTPUT_DIR / "dim_customers.csv")
    print(f"   dim_customers.csv: {n:,} rows")
    return df


# ==========================================
# PRODUCTS
# ==========================================
def generate_products(n=300):
    print(f"Generating {n:,} products...")

    cost = np.round(np.random.lognormal(mean=5.0, sigma=1.3, size=n), 0)
    cost_with_gaps = [None if np.random.rand() < 0.02 else float(c) for c in cost]

    df = pl.DataFrame({
        "product_key": np.arange(1, n + 1),
        "product_name": [f"{fake.word().title()} {fake.color_name()} {i}" for i in range(n)],
        "category": np.random.choice(CATEGORIES, n, p=[0.15, 0.35, 0.25, 0.25]),
        "cost": cost_with_gaps,
    })

    df.write_csv(OUTPUT_DIR / "dim_products.csv")
    print(f"   dim_products.csv: {n:,} rows")
    return df


# ==========================================
# SALES FACT
# ==========================================
def generate_sales(n=50000, n_customers=2000, n_products=300):
    print(f"Generating {n:,} sales rows...")

    start = date(2010, 12, 29)
    offsets = np.random.randint(0, 4 * 365, n)
    order_dates = [start + timedelta(days=int(d)) for d in offsets]
    # a small share of undated rows
    order_dates = [None if np.random.rand() < 0.001 else d for d in order_dates]

    # a few keys past the dimension range to exercise unmatched products
    product_keys = np.random.randint(1, n_products + 5, n)
    quantity = np.random.randint(1, 4, n)
    price = np.round(np.random.lognormal(mean=4.0, sigma=1.2, size=n), 0)

    df = pl.DataFrame({
        "order_number": [f"SO{43697 + i}" for i in range(n)],
        "product_key": product_keys,
        "customer_key": np.random.randint(1, n_customers + 1, n),
        "order_date": order_dates,
        "sales_amount": price * quantity,
        "quantity": quantity,
        "price": price,
    })

    df.write_csv(OUTPUT_DIR / "fact_sales.csv")
    print(f"   fact_sales.csv: {n:,} rows")
    return df


if __name__ == "__main__":
    customers = generate_customers()
    products = generate_products()
    generate_sales(n_customers=len(customers), n_products=len(products))
    print(f"Gold tables written to {OUTPUT_DIR}")
