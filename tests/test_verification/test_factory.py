"""Tests for the process-wide client factory."""

from truelist.verification import (
    InMemoryCache,
    RedisCache,
    TruelistClient,
    get_truelist_client,
    reset_truelist_client,
)


class TestGetTruelistClient:
    """Tests for get_truelist_client."""

    def test_builds_client_from_environment(self, monkeypatch):
        monkeypatch.setenv("TRUELIST_API_KEY", "env-key")
        monkeypatch.setenv("TRUELIST_RAISE_ON_ERROR", "true")
        monkeypatch.setenv("TRUELIST_CACHE_ENABLED", "true")

        client = get_truelist_client()

        assert isinstance(client, TruelistClient)
        assert client.config.api_key == "env-key"
        assert client.config.raise_on_error is True
        assert client.cache.enabled is True
        assert isinstance(client.cache._backend, InMemoryCache)

    def test_returns_same_instance(self):
        assert get_truelist_client() is get_truelist_client()

    def test_reset_builds_new_instance(self):
        first = get_truelist_client()
        reset_truelist_client()

        assert get_truelist_client() is not first

    def test_uses_redis_when_url_configured(self, monkeypatch):
        monkeypatch.setenv("TRUELIST_REDIS_URL", "redis://localhost:6379/0")

        client = get_truelist_client()

        assert isinstance(client.cache._backend, RedisCache)
