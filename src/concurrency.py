"""Concurrent join that fails fast without cancelling siblings."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, List


async def gather_first_failure(*aws: Awaitable[Any]) -> List[Any]:
    """Run ``aws`` concurrently and return their results in argument order.

    The first exception raised by any awaitable propagates immediately. The
    remaining tasks are detached, not cancelled: they keep running until they
    finish on their own, and their results or exceptions are discarded
    (``asyncio.gather`` retrieves late exceptions, so nothing is reported for
    them).
    """
    return list(await asyncio.gather(*aws))


__all__ = ["gather_first_failure"]
