"""Google Sheets gviz adapter.

Reads one sheet tab at a time through the public visualization endpoint::

    https://docs.google.com/spreadsheets/d/<id>/gviz/tq?tqx=out:json&gid=<gid>

The endpoint answers with JSON wrapped in a JavaScript callback
(``google.visualization.Query.setResponse({...});``), optionally preceded by a
``/*O_o*/`` comment line. The body is unwrapped, decoded and flattened into a
:class:`Table` of column labels and raw cell values.
"""
from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Optional

from exceptions import DataFetchError, DecodeError, FormatError
from models.schemas import Table
from models.tabs import TabRef

from .base import APIAdapter

logger = logging.getLogger(__name__)

GVIZ_BASE_URL = "https://docs.google.com/spreadsheets/d"

# Tolerant on purpose: the payload may span lines and the trailing ';' is optional.
_ENVELOPE_RE = re.compile(r"google\.visualization\.Query\.setResponse\((.*)\);?$", re.DOTALL)


def build_sheet_url(spreadsheet_id: str, gid: str, *, now_ms: Optional[int] = None) -> str:
    """Return the gviz JSON URL for one tab, with a cache-busting timestamp."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return (
        f"{GVIZ_BASE_URL}/{spreadsheet_id}/gviz/tq"
        f"?tqx=out:json&gid={gid}&timestamp={now_ms}"
    )


def extract_payload(text: str, source: str = "gviz") -> Any:
    match = _ENVELOPE_RE.search(text or "")
    if not match:
        raise FormatError(source, "invalid response format")
    try:
        return json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise DecodeError(source, f"invalid JSON payload: {e}") from e


def normalize_table(payload: Any, source: str = "gviz") -> Table:
    table = payload.get("table") if isinstance(payload, dict) else None
    if not isinstance(table, dict) or table.get("rows") is None:
        logger.warning("no data found in %s", source, extra={"source": source})
        return Table.empty()

    headers = [(col or {}).get("label") or "" for col in table.get("cols") or []]
    rows = []
    for row in table["rows"]:
        cells = (row or {}).get("c") or []
        # a missing cell, a cell without "v" and "v": null all read as None
        rows.append([cell.get("v") if isinstance(cell, dict) else None for cell in cells])
    return Table(headers=headers, rows=rows)


def parse_gviz_response(text: str, source: str = "gviz") -> Table:
    """Unwrap, decode and normalize a gviz response body.

    Raises:
        FormatError: the callback envelope is missing.
        DecodeError: the envelope does not contain valid JSON.
    """
    return normalize_table(extract_payload(text, source), source)


class GvizAdapter(APIAdapter):
    name = "gviz"

    def __init__(self, spreadsheet_id: Optional[str] = None, http=None, *, client=None, timeout: Optional[float] = None):
        super().__init__(http, client=client, timeout=timeout)
        self.spreadsheet_id = spreadsheet_id or self._settings.spreadsheet_id

    def _build_request(self, **kwargs):  # noqa: D401
        gid: str = kwargs["gid"]
        return build_sheet_url(self.spreadsheet_id, gid), None, None

    def _normalize(self, raw: str, *, source: str, request_kwargs: dict[str, Any]) -> Table:
        return parse_gviz_response(raw, source)

    async def fetch_tab(self, tab: TabRef, name: str) -> Table:
        """Fetch one tab; placeholders resolve to an empty table without a request."""
        if tab.is_placeholder:
            self._log.info("skipping %s (placeholder)", name, extra={"tab": name})
            return Table.empty()

        self._log.info("fetching %s (gid %s)", name, tab.gid, extra={"tab": name, "gid": tab.gid})
        try:
            table = await self.fetch(source=name, gid=tab.gid)
        except DataFetchError as e:
            self._log.error("fetch_failed %s: %s", name, e, extra={"tab": name, "error": str(e)})
            raise
        self._log.info(
            "fetched %s: %d rows, %d columns", name, len(table.rows), len(table.headers),
            extra={"tab": name, "rows": len(table.rows), "columns": len(table.headers)},
        )
        return table


__all__ = ["GvizAdapter", "build_sheet_url", "extract_payload", "normalize_table", "parse_gviz_response"]
