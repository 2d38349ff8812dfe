"""
Unit Tests - Data Quality
"""
import pytest
import polars as pl

from src.quality.validators import (
    DataValidator,
    ValidationSeverity,
    ValidationStatus,
    create_customers_validator,
    create_products_validator,
    create_sales_validator,
)


class TestDataValidator:
    """Tests for DataValidator"""

    def test_not_null_check_passes(self):
        """Test not null check with valid data"""
        df = pl.DataFrame({"product_key": [1, 2, 3]})

        validator = DataValidator()
        validator.add_not_null_check("product_key")

        result = validator.validate(df)

        assert result.status == ValidationStatus.PASSED
        assert result.passed_checks == 1

    def test_not_null_check_fails(self):
        """Test not null check with null values"""
        df = pl.DataFrame({"product_key": [1, None, 3]})

        validator = DataValidator()
        validator.add_not_null_check("product_key")

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.failed_checks == 1
        assert result.checks[0].failed_rows == 1

    def test_unique_check_fails(self):
        """Test unique check with duplicates"""
        df = pl.DataFrame({"customer_key": [1, 2, 1]})

        validator = DataValidator()
        validator.add_unique_check("customer_key")

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED

    def test_range_check(self):
        """Test range check ignores nulls"""
        df = pl.DataFrame({"cost": [10.0, 50.0, -5.0, 200.0, None]})

        validator = DataValidator()
        validator.add_range_check("cost", min_value=0, max_value=100)

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        # -5 and 200
        assert result.checks[0].failed_rows == 2

    def test_missing_column(self):
        """Test checks on absent columns fail"""
        df = pl.DataFrame({"other": [1]})

        validator = DataValidator()
        validator.add_not_null_check("product_key")

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        assert "not found" in result.checks[0].message

    def test_warning_gives_partial(self):
        """Test warnings do not fail a non-strict suite"""
        df = pl.DataFrame({"order_date": [None]}, schema={"order_date": pl.Date})

        validator = DataValidator()
        validator.add_not_null_check("order_date", severity=ValidationSeverity.WARNING)

        result = validator.validate(df)

        assert result.status == ValidationStatus.PARTIAL
        assert result.warning_count == 1

    def test_strict_mode(self):
        """Test warnings fail a strict suite"""
        df = pl.DataFrame({"order_date": [None]}, schema={"order_date": pl.Date})

        validator = DataValidator(strict_mode=True)
        validator.add_not_null_check("order_date", severity=ValidationSeverity.WARNING)

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED

    def test_referential_integrity(self, sample_sales_df, sample_products_df):
        """Test orphan product keys are found"""
        validator = DataValidator("fact_sales")
        validator.add_referential_integrity_check("product_key", sample_products_df)

        result = validator.validate(sample_sales_df)

        check = result.checks[0]
        assert not check.passed
        assert check.failed_rows == 1
        assert check.details == {"orphan_count": 1}


class TestGoldValidators:
    """Tests for the pre-built gold table validators"""

    def test_sales_validator(self, sample_sales_df, sample_products_df, sample_customers_df):
        """Test undated rows and orphan keys are warnings"""
        validator = create_sales_validator(sample_products_df, sample_customers_df)

        result = validator.validate(sample_sales_df)

        assert result.total_checks == 5
        assert result.status == ValidationStatus.PARTIAL
        assert result.failed_checks == 0
        assert result.warning_count == 2

    def test_products_validator(self, sample_products_df):
        """Test product dimension passes"""
        result = create_products_validator().validate(sample_products_df)

        assert result.status == ValidationStatus.PASSED
        assert result.success_rate == pytest.approx(100.0)

    def test_customers_validator_duplicates(self):
        """Test duplicate customer keys fail"""
        df = pl.DataFrame({"customer_key": [1, 1, 2]})

        result = create_customers_validator().validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.table == "dim_customers"
