"""
Integration Tests - Gold Report Flow
"""
import pytest
from prefect.testing.utilities import prefect_test_harness

from workflows.gold_reports import gold_analytics_reports


@pytest.fixture(scope="module", autouse=True)
def prefect_harness():
    """Run flows against a temporary Prefect backend"""
    with prefect_test_harness():
        yield


@pytest.fixture
def gold_dir(tmp_path, sample_sales_df, sample_products_df, sample_customers_df):
    """Sample gold tables written as CSV files"""
    sample_sales_df.write_csv(tmp_path / "fact_sales.csv")
    sample_products_df.write_csv(tmp_path / "dim_products.csv")
    sample_customers_df.write_csv(tmp_path / "dim_customers.csv")
    return tmp_path


class TestGoldReportFlow:
    """Tests for the gold_analytics_reports flow"""

    def test_all_reports_produced(self, gold_dir):
        """Test every report is returned"""
        reports = gold_analytics_reports(gold_path=str(gold_dir), granularity="year", file_format="csv")

        assert set(reports) == {
            "sales_trend",
            "cumulative_sales",
            "product_performance",
            "product_cost_segments",
            "customer_segments",
            "category_contribution",
        }
        assert reports["sales_trend"]["total_sales"].to_list() == [3000, 2700, 3400]
        assert reports["customer_segments"].rows() == [("New", 3), ("VIP", 1)]
        assert reports["category_contribution"]["overall_sales"][0] == 9150
