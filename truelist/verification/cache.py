"""Cache-aside storage for verification results."""

from datetime import datetime
from typing import Protocol

import redis.asyncio as aioredis
from pydantic import ValidationError
from redis.exceptions import RedisError

from truelist.config import CacheConfig
from truelist.core.datetime_utils import get_expiry, is_expired
from truelist.core.logging import get_logger

from .models import ValidationResult

logger = get_logger(__name__)


class CacheBackend(Protocol):
    """Minimal key-value interface the cache store needs."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl: int) -> None: ...


class InMemoryCache:
    """
    Process-local backend with per-entry expiry.

    Expired entries are dropped on read, and all of them are swept on write.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, datetime]] = {}

    async def get(self, key: str) -> str | None:
        cached = self._entries.get(key)
        if cached:
            value, expires_at = cached
            if not is_expired(expires_at):
                return value
            # Expired - remove from cache
            del self._entries[key]
        return None

    async def set(self, key: str, value: str, ttl: int) -> None:
        self._purge_expired()
        self._entries[key] = (value, get_expiry(seconds=ttl))

    def _purge_expired(self) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if is_expired(expires_at)]
        for key in expired:
            del self._entries[key]

    def clear(self) -> None:
        """Clear all cached entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache:
    """Backend storing entries in Redis with a native TTL."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        return cls(aioredis.Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as e:
            logger.bind(key=key, error=str(e)).warning("truelist_cache_read_error")
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl)
        except RedisError as e:
            logger.bind(key=key, error=str(e)).warning("truelist_cache_write_error")


def cache_key(prefix: str, email: str) -> str:
    """Case- and whitespace-insensitive key for an email address."""
    return f"{prefix}validation:{email.strip().lower()}"


class CacheStore:
    """
    Looks up and stores serialized ValidationResults.

    Only definitive verdicts are written: errors and unknown results are
    never cached, so an outage cannot poison later lookups. There is no
    locking; concurrent misses for one address each reach the API.
    """

    def __init__(self, config: CacheConfig, backend: CacheBackend | None = None) -> None:
        self._config = config
        self._backend: CacheBackend = backend if backend is not None else InMemoryCache()

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def key_for(self, email: str) -> str:
        return cache_key(self._config.prefix, email)

    async def get(self, email: str) -> ValidationResult | None:
        """Return the cached result for an address, or None on a miss."""
        if not self._config.enabled:
            return None

        key = self.key_for(email)
        raw = await self._backend.get(key)
        if raw is None:
            return None

        try:
            result = ValidationResult.model_validate_json(raw)
        except ValidationError as e:
            logger.bind(key=key, error=str(e)).warning("truelist_cache_decode_error")
            return None

        logger.bind(key=key).debug("truelist_cache_hit")
        return result

    async def put(self, email: str, result: ValidationResult) -> bool:
        """
        Store a result if caching is enabled and the result is cacheable.

        Returns:
            True if the result was written
        """
        if not self._config.enabled or not result.is_cacheable():
            return False

        await self._backend.set(self.key_for(email), result.model_dump_json(), self._config.ttl)
        return True
