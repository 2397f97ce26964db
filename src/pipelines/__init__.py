"""
Pipelines that turn fetched sheet data into the on-disk cache
"""

from .cache_builder import CacheBuilder

__all__ = ["CacheBuilder"]
