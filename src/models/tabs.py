"""
Tab references and per-dataset tab assignments.

A sheet tab is either wired up (``ACTIVE`` with a gid) or a ``PLACEHOLDER``
that has not been assigned yet. Configuration data historically marked
placeholders with gid ``"0"``; that sentinel is translated here, once, so the
fetch path only ever branches on the explicit state.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from .schemas import DATASET_SLOTS

PLACEHOLDER_GID = "0"


class TabState(str, Enum):
    ACTIVE = "active"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class TabRef:
    state: TabState
    gid: Optional[str] = None

    def __post_init__(self):
        if self.state is TabState.ACTIVE and not self.gid:
            raise ValueError("active tab requires a gid")

    @classmethod
    def active(cls, gid: str) -> "TabRef":
        return cls(TabState.ACTIVE, str(gid))

    @classmethod
    def placeholder(cls) -> "TabRef":
        return cls(TabState.PLACEHOLDER)

    @classmethod
    def from_gid(cls, gid) -> "TabRef":
        gid = str(gid).strip()
        if gid == PLACEHOLDER_GID:
            return cls.placeholder()
        return cls.active(gid)

    @property
    def is_placeholder(self) -> bool:
        return self.state is TabState.PLACEHOLDER

    def __str__(self) -> str:
        return "placeholder" if self.is_placeholder else f"gid={self.gid}"


@dataclass(frozen=True)
class DatasetConfig:
    """The seven tabs that make up one dataset."""

    overview: TabRef
    yearly: TabRef
    quarterly: TabRef
    regional: TabRef
    ev_timeseries: TabRef
    vc_timeseries: TabRef
    deep_tech_share: TabRef

    @classmethod
    def from_gids(cls, gids: Dict[str, str]) -> "DatasetConfig":
        """Build from ``{slot name: gid}`` using the serialized slot names."""
        missing = [slot for slot in DATASET_SLOTS if slot not in gids]
        if missing:
            raise ValueError(f"missing tab gids for: {', '.join(missing)}")
        refs = [TabRef.from_gid(gids[slot]) for slot in DATASET_SLOTS]
        return cls(*refs)

    def items(self) -> Iterator[Tuple[str, TabRef]]:
        """Yield ``(slot name, TabRef)`` pairs in document order."""
        for slot, field in zip(DATASET_SLOTS, fields(self)):
            yield slot, getattr(self, field.name)


__all__ = ["DatasetConfig", "PLACEHOLDER_GID", "TabRef", "TabState"]
