"""
Unit Tests - Configuration
"""
import json
import logging

import pytest
from pydantic import ValidationError

from src.config import AnalyticsSettings, Settings
from src.config.logging import (
    bind_report_context,
    clear_report_context,
    configure_logging,
    get_logger,
)


class TestSettings:
    """Tests for Settings"""

    def test_testing_environment(self, test_settings):
        """Test environment is normalized"""
        assert test_settings.app_env == "testing"
        assert Settings(APP_ENV="Production").app_env == "production"

    def test_invalid_environment(self):
        """Test unknown environments are rejected"""
        with pytest.raises(ValidationError):
            Settings(APP_ENV="moon")

    def test_analytics_defaults(self, test_settings):
        """Test default thresholds"""
        analytics = test_settings.analytics

        assert analytics.percentage_precision == 2
        assert analytics.vip_min_lifespan_months == 12
        assert analytics.vip_spending_threshold == 5000
        assert tuple(analytics.cost_segment_bounds) == (100, 500, 1000)


class TestAnalyticsSettings:
    """Tests for AnalyticsSettings validation"""

    def test_granularity_normalized(self):
        """Test granularity is lower-cased"""
        assert AnalyticsSettings(default_granularity="YEAR").default_granularity == "year"

    def test_invalid_granularity(self):
        """Test unsupported granularity"""
        with pytest.raises(ValidationError):
            AnalyticsSettings(default_granularity="week")

    def test_bounds_must_increase(self):
        """Test unordered cost bounds"""
        with pytest.raises(ValidationError):
            AnalyticsSettings(cost_segment_bounds=(500, 100, 1000))


class TestLogging:
    """Tests for logging configuration"""

    def test_configure_text_logging(self):
        """Test console renderer setup"""
        configure_logging("DEBUG", "text")

        assert logging.getLogger().level == logging.DEBUG
        get_logger("tests").info("Logging ready", check=True)

    def test_configure_json_logging(self, capsys):
        """Test JSON lines carry the bound run context"""
        configure_logging("INFO", "json")
        bind_report_context(environment="testing", gold_path="/data/gold")
        try:
            get_logger("tests").info("Report computed", rows=3)
        finally:
            clear_report_context()

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "Report computed"
        assert record["rows"] == 3
        assert record["gold_path"] == "/data/gold"
        assert record["level"] == "info"

    def test_quiet_loggers(self, test_settings):
        """Test dependency loggers are raised to WARNING"""
        configure_logging("DEBUG", "text")

        for name in test_settings.monitoring.quiet_loggers:
            assert logging.getLogger(name).level == logging.WARNING
