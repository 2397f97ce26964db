"""Cache refresh entrypoint (flat layout).

Exit code 0 when the cache file was rewritten, 1 when the refresh failed; the
previous cache file is kept on failure.
"""

import asyncio
import sys

from app_logging import get_logger, init_logging
from config import get_settings
from exceptions import OrchestrationError
from pipelines.cache_builder import CacheBuilder


def main(http=None) -> int:
    init_logging()
    log = get_logger("sheets_cache.main")
    settings = get_settings()
    log.info("🔄 Fetching fresh Google Sheets data...")
    log.info("📋 Spreadsheet ID: %s", settings.spreadsheet_id)
    try:
        asyncio.run(CacheBuilder(settings, http=http).run())
    except OrchestrationError as e:
        log.error("cache refresh failed: %s", e, extra={"error": str(e)})
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
