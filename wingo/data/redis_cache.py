"""Redis prediction cache implementing the PredictionCache protocol."""

from __future__ import annotations

import json
import math
import os
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from wingo.core.logging import get_logger

log = get_logger(__name__)

DEFAULT_TTL = 60
KEY_PREFIX = "wingo:"


class RedisCache:
    """Async Redis cache with JSON serialization and key prefixing.

    Lets the last prediction survive across processes (e.g. separate CLI
    invocations). Reads URL from REDIS_URL env var when none is given.
    """

    def __init__(
        self,
        url: str | None = None,
        prefix: str = KEY_PREFIX,
        default_ttl: int = DEFAULT_TTL,
        socket_timeout: float = 5.0,
        socket_connect_timeout: float = 5.0,
    ) -> None:
        self._url = url or os.environ.get("REDIS_URL", "redis://localhost:6379/0")
        self._prefix = prefix
        self._default_ttl = default_ttl
        self._socket_timeout = socket_timeout
        self._socket_connect_timeout = socket_connect_timeout
        self._redis: redis.Redis | None = None

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def _get_redis(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(  # type: ignore[no-untyped-call]
                self._url,
                decode_responses=True,
                socket_timeout=self._socket_timeout,
                socket_connect_timeout=self._socket_connect_timeout,
            )
        return self._redis

    async def ping(self) -> bool:
        """Check Redis connectivity. Returns True if healthy."""
        try:
            r = await self._get_redis()
            return bool(await r.ping())
        except RedisError as exc:
            log.warning("redis_cache.ping_failed", error=str(exc))
            return False

    async def get(self, key: str) -> Any:
        """Get a value by key. Returns None if not found."""
        r = await self._get_redis()
        raw = await r.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            return raw

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Set a value with optional TTL (seconds, rounded up)."""
        r = await self._get_redis()
        serialized = json.dumps(value, default=str)
        effective_ttl = math.ceil(ttl) if ttl is not None else self._default_ttl
        await r.set(self._key(key), serialized, ex=effective_ttl)

    async def has(self, key: str) -> bool:
        r = await self._get_redis()
        return bool(await r.exists(self._key(key)))

    async def delete(self, key: str) -> None:
        """Delete a key."""
        r = await self._get_redis()
        await r.delete(self._key(key))

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
