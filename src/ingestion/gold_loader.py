"""
Gold Table Loader

Reads the star-schema gold tables (sales fact, product and customer
dimensions) from CSV or Parquet files into polars DataFrames.
Supports:
- Expected column checks
- Date column parsing
- Configurable null markers
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

import polars as pl
import structlog

from src.analytics.schema import (
    DIM_CUSTOMERS,
    DIM_PRODUCTS,
    FACT_SALES,
    TABLE_COLUMNS,
    require_columns,
)
from src.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()


class FileFormat(str, Enum):
    """Supported file formats"""
    CSV = "csv"
    PARQUET = "parquet"


@dataclass
class GoldTableConfig:
    """Configuration for loading one gold table"""
    file_path: Union[str, Path]
    table: str
    file_format: FileFormat = FileFormat.CSV
    expected_columns: List[str] = field(default_factory=list)
    date_columns: List[str] = field(default_factory=list)
    date_format: str = "%Y-%m-%d"
    delimiter: str = ","
    null_values: List[str] = field(default_factory=lambda: ["", "NULL", "null", "None", "NA", "N/A"])


@dataclass
class GoldTables:
    """The three gold tables every report reads"""
    fact_sales: pl.DataFrame
    dim_products: pl.DataFrame
    dim_customers: pl.DataFrame

    def as_dict(self) -> Dict[str, pl.DataFrame]:
        return {
            FACT_SALES: self.fact_sales,
            DIM_PRODUCTS: self.dim_products,
            DIM_CUSTOMERS: self.dim_customers,
        }


class GoldTableLoader:
    """
    Loader for gold-layer tables.

    Example:
        loader = GoldTableLoader()
        tables = loader.load_all("data/gold")
        trend = sales_by_period(tables.fact_sales)
    """

    def __init__(self, file_format: Optional[Union[FileFormat, str]] = None):
        self.file_format = FileFormat(file_format or settings.data_lake.default_format)

    def _read_csv(self, config: GoldTableConfig) -> pl.DataFrame:
        """Read CSV file with Polars"""
        return pl.read_csv(
            config.file_path,
            separator=config.delimiter,
            null_values=config.null_values,
            try_parse_dates=True,
        )

    def _read_parquet(self, config: GoldTableConfig) -> pl.DataFrame:
        """Read Parquet file"""
        return pl.read_parquet(config.file_path)

    def _read_file(self, config: GoldTableConfig) -> pl.DataFrame:
        """Read file based on format"""
        readers = {
            FileFormat.CSV: self._read_csv,
            FileFormat.PARQUET: self._read_parquet,
        }
        reader = readers.get(config.file_format)
        if not reader:
            raise ValueError(f"Unsupported file format: {config.file_format}")
        return reader(config)

    def _parse_dates(self, df: pl.DataFrame, config: GoldTableConfig) -> pl.DataFrame:
        """Parse date columns the reader left as strings"""
        for col in config.date_columns:
            if col not in df.columns:
                continue
            dtype = df.schema[col]
            if dtype == pl.Utf8:
                df = df.with_columns(
                    pl.col(col).str.strptime(pl.Date, config.date_format, strict=False)
                )
            elif dtype == pl.Null:
                # column with no values at all
                df = df.with_columns(pl.col(col).cast(pl.Date))
        return df

    def load_table(self, config: GoldTableConfig) -> pl.DataFrame:
        """
        Load a single gold table.

        Raises:
            FileNotFoundError: If the file does not exist
            MissingColumnsError: If expected columns are absent
        """
        file_path = Path(config.file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Gold table file not found: {file_path}")

        df = self._read_file(config)
        require_columns(df, config.expected_columns, config.table)
        df = self._parse_dates(df, config)

        logger.info(
            "Loaded gold table",
            table=config.table,
            rows=len(df),
            file=str(file_path),
        )
        return df

    def table_config(self, gold_path: Union[str, Path], table: str, file_stem: str) -> GoldTableConfig:
        """Build the config for one of the known gold tables"""
        suffix = "parquet" if self.file_format == FileFormat.PARQUET else "csv"
        return GoldTableConfig(
            file_path=Path(gold_path) / f"{file_stem}.{suffix}",
            table=table,
            file_format=self.file_format,
            expected_columns=TABLE_COLUMNS[table],
            date_columns=["order_date"] if table == FACT_SALES else [],
        )

    def load_all(self, gold_path: Optional[Union[str, Path]] = None) -> GoldTables:
        """Load the sales fact and both dimensions from `gold_path`"""
        gold_path = Path(gold_path or settings.data_lake.gold_path)
        lake = settings.data_lake

        return GoldTables(
            fact_sales=self.load_table(self.table_config(gold_path, FACT_SALES, lake.fact_sales_file)),
            dim_products=self.load_table(self.table_config(gold_path, DIM_PRODUCTS, lake.dim_products_file)),
            dim_customers=self.load_table(self.table_config(gold_path, DIM_CUSTOMERS, lake.dim_customers_file)),
        )
