"""Data collectors for the sheet-backed datasets."""

from .dataset_collector import DatasetCollector, fetch_dataset

__all__ = ["DatasetCollector", "fetch_dataset"]
