"""
Gold Table Ingestion Module
"""
from .gold_loader import FileFormat, GoldTableConfig, GoldTableLoader, GoldTables

__all__ = [
    "FileFormat",
    "GoldTableConfig",
    "GoldTableLoader",
    "GoldTables",
]
