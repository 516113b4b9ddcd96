"""WinGo draw history REST client."""

from __future__ import annotations

import re
from typing import Any

import httpx
from pydantic import ValidationError

from wingo.core.logging import get_logger
from wingo.errors import DataSourceError
from wingo.models.draw import DrawRecord, HistorySeries

log = get_logger(__name__)

DEFAULT_URL = "https://draw.ar-lottery01.com/WinGo/WinGo_1M/GetHistoryIssuePage.json"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_number(raw: Any) -> int:
    """Leading-integer parse; anything unparseable counts as 0."""
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else 0


def parse_history(payload: Any) -> HistorySeries:
    """Parse the upstream page into a HistorySeries, oldest first.

    Raises:
        DataSourceError: If the payload does not have the expected shape.
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    items = data.get("list") if isinstance(data, dict) else None
    if not isinstance(items, list):
        msg = "Invalid API response structure"
        raise DataSourceError(msg)

    try:
        records = [
            DrawRecord(
                issue_id=str(item.get("issueNumber", "")),
                number=_parse_number(item.get("number")),
                timestamp=item.get("createTime") or "",
            )
            for item in items
        ]
    except (AttributeError, ValidationError) as exc:
        msg = f"Invalid draw record: {exc}"
        raise DataSourceError(msg) from exc

    # Upstream lists newest first
    records.reverse()
    return HistorySeries(records=records)


class DrawHistoryClient:
    """Async client for the draw history endpoint.

    Implements the DataSource protocol from wingo.interfaces. Errors are
    raised as DataSourceError and never retried here.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout_seconds: float = 8.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._url = url
        self._timeout = timeout_seconds
        self._user_agent = user_agent
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "User-Agent": self._user_agent,
                    "Accept": "application/json",
                },
                timeout=httpx.Timeout(self._timeout),
            )
        return self._client

    async def fetch(self) -> HistorySeries:
        """Fetch the latest page of draw history."""
        client = await self._get_client()
        try:
            resp = await client.get(self._url)
        except httpx.TimeoutException as exc:
            log.warning("draw_client.timeout", url=self._url, timeout=self._timeout)
            msg = "Request timeout"
            raise DataSourceError(msg) from exc
        except httpx.HTTPError as exc:
            log.warning("draw_client.transport_error", url=self._url, error=str(exc))
            msg = f"Request failed: {exc}"
            raise DataSourceError(msg) from exc

        if not resp.is_success:
            msg = f"HTTP {resp.status_code}"
            raise DataSourceError(msg)

        try:
            payload = resp.json()
        except ValueError as exc:
            msg = "Invalid JSON in API response"
            raise DataSourceError(msg) from exc

        history = parse_history(payload)
        log.debug("draw_client.fetched", records=len(history))
        return history

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
