"""Adapter registry/factory."""
from __future__ import annotations

from .base import APIAdapter
from .gviz import GvizAdapter

_ADAPTERS: dict[str, type[APIAdapter]] = {
    GvizAdapter.name: GvizAdapter,
}


def get_adapter(name: str, **kwargs) -> APIAdapter:
    cls = _ADAPTERS.get(name.lower())
    if not cls:
        raise ValueError(f"Unknown adapter: {name}")
    return cls(**kwargs)


__all__ = ["get_adapter", "APIAdapter", "GvizAdapter"]
