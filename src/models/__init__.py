"""
Data models for sheet tabs, parsed tables and the cache document
"""

from .data_types import CellValue
from .schemas import DATASET_SLOTS, CacheDocument, Dataset, Table
from .tabs import DatasetConfig, TabRef, TabState

__all__ = [
    "CacheDocument",
    "CellValue",
    "DATASET_SLOTS",
    "Dataset",
    "DatasetConfig",
    "Table",
    "TabRef",
    "TabState",
]
