"""Pydantic schemas for the parsed tables and the on-disk cache document."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .data_types import CellValue

# Serialized slot names, in document order.
DATASET_SLOTS = (
    "overview",
    "yearly",
    "quarterly",
    "regional",
    "evTimeseries",
    "vcTimeseries",
    "deepTechShare",
)


class Table(BaseModel):
    """Normalized sheet tab: column labels plus raw cell values per row."""

    headers: List[str] = Field(default_factory=list)
    rows: List[List[CellValue]] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "Table":
        return cls(headers=[], rows=[])


class Dataset(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overview: Table
    yearly: Table
    quarterly: Table
    regional: Table
    ev_timeseries: Table = Field(alias="evTimeseries")
    vc_timeseries: Table = Field(alias="vcTimeseries")
    deep_tech_share: Table = Field(alias="deepTechShare")

    @classmethod
    def from_slots(cls, tables: Dict[str, Table]) -> "Dataset":
        """Build from a ``{slot name: Table}`` mapping keyed by serialized names."""
        return cls.model_validate({slot: tables[slot] for slot in DATASET_SLOTS})

    def slot(self, name: str) -> Table:
        return getattr(self, self.slot_attributes()[name])

    @classmethod
    def slot_attributes(cls) -> Dict[str, str]:
        return {(info.alias or attr): attr for attr, info in cls.model_fields.items()}


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CacheDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: str
    last_updated: str = Field(alias="lastUpdated")
    locations: Dataset
    sectors: Dataset

    @classmethod
    def capture(cls, locations: Dataset, sectors: Dataset, moment: datetime) -> "CacheDocument":
        # one instant feeds both fields
        stamp = iso_timestamp(moment)
        return cls(timestamp=stamp, last_updated=stamp, locations=locations, sectors=sectors)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


__all__ = ["CacheDocument", "DATASET_SLOTS", "Dataset", "Table", "iso_timestamp"]
