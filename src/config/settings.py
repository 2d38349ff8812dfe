"""
Gold-Layer Sales Analytics
Centralized Configuration Management

This module provides configuration management using Pydantic settings with
environment variable support, validation, and type safety.
"""

from functools import lru_cache
from typing import List, Optional, Tuple
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyticsSettings(BaseSettings):
    """Analytical query thresholds and defaults"""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    default_granularity: str = Field(default="month", description="Default period for trend reports")
    percentage_precision: int = Field(default=2, description="Decimals kept in percentage_of_total")
    vip_min_lifespan_months: int = Field(default=12, description="Minimum lifespan for VIP/Regular customers")
    vip_spending_threshold: float = Field(default=5000.0, description="Spending above which a customer is VIP")
    cost_segment_bounds: Tuple[float, float, float] = Field(
        default=(100.0, 500.0, 1000.0),
        description="Product cost segment boundaries",
    )

    @field_validator("default_granularity")
    @classmethod
    def validate_granularity(cls, v: str) -> str:
        """Validate granularity value"""
        allowed = ["month", "year"]
        if v.lower() not in allowed:
            raise ValueError(f"Granularity must be one of: {allowed}")
        return v.lower()

    @field_validator("cost_segment_bounds")
    @classmethod
    def validate_bounds(cls, v: Tuple[float, float, float]) -> Tuple[float, float, float]:
        """Bounds must be strictly increasing"""
        low, mid, high = v
        if not low < mid < high:
            raise ValueError("cost_segment_bounds must be strictly increasing")
        return v


class DataLakeSettings(BaseSettings):
    """Gold Layer Storage Configuration"""

    model_config = SettingsConfigDict(env_prefix="DATA_")

    gold_path: str = Field(default="./data/gold", description="Gold layer root path")
    fact_sales_file: str = Field(default="fact_sales", description="Sales fact table file stem")
    dim_products_file: str = Field(default="dim_products", description="Product dimension file stem")
    dim_customers_file: str = Field(default="dim_customers", description="Customer dimension file stem")

    # File formats
    default_format: str = Field(default="csv", description="Default file format")


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")
    quiet_loggers: List[str] = Field(
        default=["httpx", "httpcore", "urllib3"],
        description="Libraries logged at WARNING and above only",
    )


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")

    # Subsystem configurations
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    data_lake: DataLakeSettings = Field(default_factory=DataLakeSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
