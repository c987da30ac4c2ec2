"""Redis-backed read-through cache for account lookups.

Values are stored as JSON with a TTL. When Redis is unreachable the cache
reports itself unavailable and every call becomes a no-op, so the API keeps
serving from the database.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

import redis.asyncio as redis

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache (ICacheService). Call connect() at startup and disconnect() at shutdown."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        *,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: str | None = None,
        default_ttl: int = 300,
    ) -> None:
        self.redis = redis_client
        self.host = host
        self.port = port
        self.db = db
        self.password = password
        self.default_ttl = default_ttl
        self._connected = redis_client is not None

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheService:
        """Build an unconnected cache from REDIS_* settings."""
        return cls(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=(
                settings.redis_password.get_secret_value()
                if settings.redis_password
                else None
            ),
            default_ttl=settings.cache_ttl_accounts,
        )

    async def connect(self) -> None:
        """Open and ping the Redis connection; on failure the cache stays disabled."""
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.host,
            port=self.port,
            db=self.db,
            password=self.password,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info("Redis cache connected: %s:%s", self.host, self.port)

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        if self.redis is not None:
            await self.redis.aclose()
            logger.info("Redis cache disconnected")
        self.redis = None
        self._connected = False

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        op: str,
        key: str,
        call: Callable[[redis.Redis], Awaitable[T]],
        fallback: T,
    ) -> T:
        """Run call against Redis; reconnect once on connection loss, else return fallback."""
        if not self.is_available() or self.redis is None:
            return fallback
        try:
            return await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            logger.warning("Cache %s lost connection for key %s; reconnecting", op, key)
            await self.disconnect()
            await self.connect()
            if self.redis is None:
                return fallback
            try:
                return await call(self.redis)
            except redis.RedisError:
                logger.exception("Cache %s error for key %s after reconnect", op, key)
                return fallback
        except redis.RedisError:
            logger.exception("Cache %s error for key %s", op, key)
            return fallback

    async def get(self, key: str) -> Any | None:
        """Return the cached value (JSON-decoded) or None on miss/unavailable."""
        raw = await self._run("get", key, lambda r: r.get(key), None)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value (JSON-serializable) with ttl seconds; default ttl from settings."""
        serialized = json.dumps(value)
        seconds = ttl if ttl is not None else self.default_ttl

        async def _setex(r: redis.Redis) -> bool:
            await r.setex(key, seconds, serialized)
            return True

        stored = await self._run("set", key, _setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, seconds)
        return stored

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True if the delete reached Redis."""

        async def _delete(r: redis.Redis) -> bool:
            await r.delete(key)
            return True

        deleted = await self._run("delete", key, _delete, False)
        if deleted:
            logger.debug("Cache DELETE: %s", key)
        return deleted
