"""
Pytest configuration and fixtures for Truelist client tests.

Provides:
- Isolation from the developer's environment, .env and truelist.yml
- A fake Truelist API built on httpx.MockTransport
- Factories for configs and API response bodies
"""

import asyncio
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from truelist.config import CacheConfig, TruelistConfig, get_config, get_settings
from truelist.verification import reset_truelist_client

API_URL = "https://api.truelist.io/api/v1/verify"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Clear TRUELIST_* variables and cached settings around every test."""
    for name in list(os.environ):
        if name.startswith("TRUELIST_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    get_settings.cache_clear()
    get_config.cache_clear()
    reset_truelist_client()
    yield
    get_settings.cache_clear()
    get_config.cache_clear()
    reset_truelist_client()


class FakeTruelistApi:
    """
    Scripted stand-in for the verification endpoint.

    Queued items are served in order; the last one keeps being served once
    the queue is down to it. Exceptions are raised from the transport.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queue: list[httpx.Response | Exception] = []

    def queue(self, *items: httpx.Response | Exception) -> "FakeTruelistApi":
        self._queue.extend(items)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._queue:
            raise AssertionError("FakeTruelistApi received an unexpected request")
        item = self._queue.pop(0) if len(self._queue) > 1 else self._queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def calls(self) -> int:
        return len(self.requests)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    def slow_client(self, delay: float) -> httpx.AsyncClient:
        """Client whose every response is held back for ``delay`` seconds."""

        async def handle(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(delay)
            return self._handle(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(handle))


@pytest.fixture
def fake_api() -> FakeTruelistApi:
    return FakeTruelistApi()


@pytest.fixture
def make_config() -> Callable[..., TruelistConfig]:
    """Factory for client configs with a key set and no retry delay."""

    def _make(cache_enabled: bool = False, **overrides: Any) -> TruelistConfig:
        values: dict[str, Any] = {
            "api_key": "test-key",
            "retry_delay": 0.0,
            "cache": CacheConfig(enabled=cache_enabled, ttl=3600, prefix="truelist:"),
        }
        values.update(overrides)
        return TruelistConfig(**values)

    return _make


def api_body(
    state: str | None = "ok",
    sub_state: str | None = "email_ok",
    address: str = "user@example.com",
    **extra: Any,
) -> dict[str, Any]:
    """Build a response body in the API's list-based schema."""
    entry: dict[str, Any] = {
        "address": address,
        "domain": address.split("@")[-1],
        "canonical": address.split("@")[0],
        "mx_record": None,
        "first_name": None,
        "last_name": None,
        "email_state": state,
        "email_sub_state": sub_state,
        "verified_at": "2024-05-01T12:00:00.000Z",
        "did_you_mean": None,
    }
    entry.update(extra)
    return {"emails": [entry]}


def api_response(status_code: int = 200, **body_kwargs: Any) -> httpx.Response:
    """Build a JSON httpx response for the fake API."""
    return httpx.Response(status_code, json=api_body(**body_kwargs))


@pytest.fixture
def make_body() -> Callable[..., dict[str, Any]]:
    return api_body


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    return api_response
