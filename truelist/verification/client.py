"""Truelist verification client: cache, request, classify, apply policy."""

import httpx

from truelist.config import TruelistConfig
from truelist.core.logging import get_logger

from .cache import CacheBackend, CacheStore
from .errors import (
    AuthenticationError,
    RateLimitError,
    TruelistError,
    classify_exception,
    classify_response,
)
from .executor import RequestExecutor
from .models import ValidationResult
from .parser import parse_response

logger = get_logger(__name__)


class TruelistClient:
    """
    Single entry point for verifying email addresses.

    ``validate`` either returns a ValidationResult or raises. It raises
    AuthenticationError always, and any other TruelistError only when
    ``raise_on_error`` is configured. Otherwise failures come back as an
    UNKNOWN result with ``error=True`` (fail open).
    """

    def __init__(
        self,
        config: TruelistConfig,
        cache_backend: CacheBackend | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Explicit client configuration
            cache_backend: Key-value backend for results, in-memory if omitted
            http_client: Optional shared httpx client (caller owns it)
        """
        self.config = config
        self.cache = CacheStore(config.cache, cache_backend)
        self.executor = RequestExecutor(config, http_client=http_client)

    async def validate(self, email: str) -> ValidationResult:
        """Verify a single email address."""
        cached = await self.cache.get(email)
        if cached is not None:
            return cached

        outcome = await self._request(email)
        if isinstance(outcome, TruelistError):
            return self._apply_policy(email, outcome)

        await self.cache.put(email, outcome)
        return outcome

    async def validate_batch(self, emails: list[str]) -> list[ValidationResult]:
        """Verify several addresses one after another, results in input order."""
        return [await self.validate(email) for email in emails]

    async def _request(self, email: str) -> ValidationResult | TruelistError:
        """Call the API and turn every outcome into a result or a typed error."""
        try:
            response = await self.executor.execute(email)
        except (TruelistError, httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # ValueError covers addresses that cannot be encoded into the URL
            return classify_exception(e)

        error = classify_response(response)
        if error is not None:
            return error

        try:
            return parse_response(email, response.content)
        except TruelistError as e:
            e.status_code = response.status_code
            return e

    def _apply_policy(self, email: str, error: TruelistError) -> ValidationResult:
        """Raise or fail open, depending on the error type and configuration."""
        if isinstance(error, AuthenticationError):
            logger.bind(status=error.status_code).error("truelist_auth_failure")
            raise error

        if isinstance(error, RateLimitError):
            logger.bind(email=email).warning("truelist_rate_limited")
        else:
            logger.bind(email=email, status=error.status_code, error=str(error)).warning(
                "truelist_api_error"
            )

        if self.config.raise_on_error:
            raise error

        logger.bind(email=email).info("truelist_failing_open")
        return ValidationResult.unknown_error(email)
