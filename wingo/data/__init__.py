"""Data collaborators — draw history client and prediction caches."""

from __future__ import annotations

from wingo.data.draw_client import DrawHistoryClient, parse_history
from wingo.data.memory_cache import MemoryCache
from wingo.data.redis_cache import RedisCache

__all__ = [
    "DrawHistoryClient",
    "MemoryCache",
    "RedisCache",
    "parse_history",
]
