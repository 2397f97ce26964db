"""Base HTTP adapter for remote tabular sources.

Thin, testable abstraction that:
 - Pulls the request timeout from settings (``SHEETS_CACHE_HTTP_TIMEOUT``)
 - Logs through the shared ``get_logger``
 - Normalizes transport failures into ``FetchError``

Concrete adapters implement `_build_request` + `_normalize` only.
The async HTTP callable is injectable for deterministic tests; by default an
``httpx.AsyncClient`` owned by the adapter is used.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol

import httpx

from app_logging import get_logger
from config import get_settings
from exceptions import DataFetchError, FetchError


class HTTPResponse(Protocol):
    status_code: int
    reason_phrase: str
    text: str


class HTTPClient(Protocol):
    async def __call__(self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None, timeout: float | None = None) -> HTTPResponse:  # noqa: D401,E501
        ...


class APIAdapter(ABC):
    """Abstract base adapter.

    Subclasses implement request construction and payload normalization.
    The public `.fetch()` method provides unified logging + exception discipline.
    No retries: a failed request fails the caller immediately.
    """

    name: str = "base"

    def __init__(self, http: HTTPClient | None = None, *, client: httpx.AsyncClient | None = None, timeout: float | None = None):
        self._http = http or self._default_http
        self._settings = get_settings()
        self._timeout = timeout if timeout is not None else self._settings.http_timeout
        self._client = client
        self._owns_client = client is None
        self._log = get_logger(f"sheets_cache.adapters.{self.name}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ----------------- Public API -----------------
    async def fetch(self, *, source: str | None = None, **kwargs) -> Any:  # noqa: D401
        """Fetch one payload and return its normalized form.

        Raises:
            FetchError: on a non-2xx status.
            DataFetchError: on transport or format issues.
        """
        source = source or self.name
        url, params, headers = self._build_request(**kwargs)
        self._log.debug("request", extra={"source": source, "url": url})
        try:
            response = await self._http(url, params=params, headers=headers, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise DataFetchError(source, f"transport error: {e}") from e
        if not 200 <= response.status_code < 300:
            raise FetchError(source, response.status_code, getattr(response, "reason_phrase", "") or "")
        try:
            return self._normalize(response.text, source=source, request_kwargs=kwargs)
        except DataFetchError:
            raise
        except Exception as e:
            raise DataFetchError(source, f"unexpected payload: {e}") from e

    # ----------------- Overridables -----------------
    @abstractmethod
    def _build_request(self, **kwargs) -> tuple[str, dict[str, Any] | None, dict[str, str] | None]:
        """Return (url, params, headers)."""

    @abstractmethod
    def _normalize(self, raw: str, *, source: str, request_kwargs: dict[str, Any]) -> Any:
        """Normalize the raw response body."""

    # ----------------- Helpers -----------------
    async def _default_http(self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None, timeout: float | None = None):  # noqa: D401,E501
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True)
        return await self._client.get(url, params=params, headers=headers)


__all__ = ["APIAdapter", "HTTPClient", "HTTPResponse"]
