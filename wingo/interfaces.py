"""Protocol interfaces for the collaborators the prediction core depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from wingo.models.draw import HistorySeries


@runtime_checkable
class DataSource(Protocol):
    """Protocol for draw history sources.

    ``fetch`` raises DataSourceError on network failure, timeout or a
    malformed payload.
    """

    async def fetch(self) -> HistorySeries: ...


@runtime_checkable
class PredictionCache(Protocol):
    """Protocol for the short-lived keyed store holding the last prediction.

    TTLs are in seconds. No transactional guarantees.
    """

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None: ...

    async def has(self, key: str) -> bool: ...

    async def delete(self, key: str) -> None: ...
