"""In-process TTL cache implementing the PredictionCache protocol."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

DEFAULT_TTL = 60.0


class MemoryCache:
    """Keyed store with per-entry expiry, evicted lazily on read.

    Shared by every session in the process. Sessions read once and write
    once with a full replacement, so overlapping sessions can only race on
    which prediction is stored last.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    async def get(self, key: str) -> Any:
        """Get a value by key. Returns None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Set a value with optional TTL (seconds)."""
        effective_ttl = ttl if ttl is not None else self._default_ttl
        self._entries[key] = (value, self._clock() + effective_ttl)

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
