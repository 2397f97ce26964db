"""
Cache refresh pipeline: fetch both datasets and persist one cache document
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx
from loguru import logger

from adapters.base import HTTPClient
from adapters.gviz import GvizAdapter
from collectors.dataset_collector import fetch_dataset
from concurrency import gather_first_failure
from config import LOCATIONS_CONFIG, SECTORS_CONFIG, _Settings, get_settings
from exceptions import OrchestrationError
from models.schemas import CacheDocument
from models.tabs import DatasetConfig
from store import ensure_directory, write_text_atomic


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheBuilder:
    """
    Orchestrates one cache refresh.

    Steps: make sure the cache directory exists, fetch ``locations`` and
    ``sectors`` concurrently, stamp the document with a single instant and
    write it over the previous cache file. Any failure aborts the run before
    the cache file is touched.
    """

    def __init__(
        self,
        settings: Optional[_Settings] = None,
        *,
        http: Optional[HTTPClient] = None,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], datetime] = _utcnow,
        locations: DatasetConfig = LOCATIONS_CONFIG,
        sectors: DatasetConfig = SECTORS_CONFIG,
    ):
        self.settings = settings or get_settings()
        self.locations = locations
        self.sectors = sectors
        self._http = http
        self._client = client
        self._clock = clock

    def _adapter(self) -> GvizAdapter:
        return GvizAdapter(
            self.settings.spreadsheet_id,
            self._http,
            client=self._client,
            timeout=self.settings.http_timeout,
        )

    async def build(self, adapter: GvizAdapter) -> CacheDocument:
        """Fetch both datasets and assemble the document. Nothing is written."""
        locations, sectors = await gather_first_failure(
            fetch_dataset(adapter, self.locations, "locations"),
            fetch_dataset(adapter, self.sectors, "sectors"),
        )
        return CacheDocument.capture(locations, sectors, self._clock())

    async def run(self) -> CacheDocument:
        """Refresh the cache file.

        Raises:
            OrchestrationError: a dataset fetch failed or the file could not
                be written; the previous cache file is left as it was.
        """
        cache_path = self.settings.cache_path
        try:
            ensure_directory(cache_path.parent)
            async with self._adapter() as adapter:
                document = await self.build(adapter)
            await asyncio.to_thread(write_text_atomic, cache_path, document.to_json())
        except Exception as e:
            logger.error(f"❌ Cache update failed: {e}")
            raise OrchestrationError("cache", str(e)) from e

        logger.info("✅ Cache updated successfully!")
        logger.info(f"📁 Cache file: {cache_path}")
        logger.info(f"🕒 Timestamp: {document.timestamp}")
        logger.info(f"   Locations - Overview: {len(document.locations.overview.rows)} rows")
        logger.info(f"   Sectors - Overview: {len(document.sectors.overview.rows)} rows")
        return document


__all__ = ["CacheBuilder"]
