"""Email verification against the Truelist API."""

from truelist.config import get_config, get_settings

from .cache import CacheBackend, CacheStore, InMemoryCache, RedisCache
from .client import TruelistClient
from .errors import ApiError, AuthenticationError, RateLimitError, TruelistError
from .models import EmailState, ValidationResult
from .rules import DeliverableRule, is_deliverable

__all__ = [
    "ApiError",
    "AuthenticationError",
    "CacheBackend",
    "CacheStore",
    "DeliverableRule",
    "EmailState",
    "InMemoryCache",
    "RateLimitError",
    "RedisCache",
    "TruelistClient",
    "TruelistError",
    "ValidationResult",
    "build_cache_backend",
    "get_truelist_client",
    "is_deliverable",
    "reset_truelist_client",
]

_client_instance: TruelistClient | None = None


def build_cache_backend() -> CacheBackend:
    """Redis when TRUELIST_REDIS_URL is set, otherwise process memory."""
    redis_url = get_settings().redis_url
    return RedisCache.from_url(redis_url) if redis_url else InMemoryCache()


def get_truelist_client() -> TruelistClient:
    """
    Get the process-wide client instance.

    Built once from the environment and truelist.yml. Results are cached in
    Redis when TRUELIST_REDIS_URL is set, otherwise in process memory.
    """
    global _client_instance
    if _client_instance is not None:
        return _client_instance

    _client_instance = TruelistClient(get_config(), cache_backend=build_cache_backend())
    return _client_instance


def reset_truelist_client() -> None:
    """Reset the client instance. Useful for testing."""
    global _client_instance
    _client_instance = None
