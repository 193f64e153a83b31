"""HTTP request execution against the Truelist verify endpoint."""

import asyncio

import httpx

from truelist.config import TruelistConfig
from truelist.core.logging import get_logger
from truelist.core.retry import RetryConfig, retry_with_backoff

from .errors import AuthenticationError

logger = get_logger(__name__)

USER_AGENT = "truelist-python/0.1.0"


class TransientResponseError(Exception):
    """Raised inside a retry attempt when the service answered 429 or 5xx."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Transient HTTP status {response.status_code}")
        self.response = response


def is_transient_status(status_code: int) -> bool:
    """429 and 5xx are worth another attempt; every other status is final."""
    return status_code == 429 or status_code >= 500


class RequestExecutor:
    """
    Sends verification requests with a bounded, fixed-delay retry.

    The executor returns whatever response the last attempt produced. It only
    raises for a missing API key (before any network I/O) and for a transport
    failure that persisted through every attempt.
    """

    def __init__(
        self,
        config: TruelistConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the executor.

        Args:
            config: Client configuration
            http_client: Optional shared client. When given the caller owns
                its lifecycle; otherwise a client is opened per call.
        """
        self._config = config
        self._http_client = http_client
        self._timeout = httpx.Timeout(config.timeout)
        self._retry = RetryConfig(
            max_attempts=config.max_retries + 1,
            delay=config.retry_delay,
            retryable_exceptions=(TransientResponseError, httpx.TransportError),
        )

    @property
    def url(self) -> str:
        return self._config.endpoint

    async def execute(self, email: str) -> httpx.Response:
        """
        Submit one address for verification.

        Raises:
            AuthenticationError: If no API key is configured
            httpx.TransportError: If every attempt failed at the transport level
        """
        if not self._config.api_key:
            raise AuthenticationError(
                "Truelist API key is not configured. Set TRUELIST_API_KEY in your environment."
            )

        if self._http_client is not None:
            return await self._send(self._http_client, email)

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._send(client, email)

    async def _send(self, client: httpx.AsyncClient, email: str) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

        async def attempt() -> httpx.Response:
            logger.bind(email=email).debug("truelist_request")
            try:
                async with asyncio.timeout(self._config.timeout):
                    response = await client.post(
                        self.url,
                        params={"email": email},
                        headers=headers,
                        timeout=self._timeout,
                    )
            except TimeoutError as e:
                # Whole attempt, body included
                raise httpx.TimeoutException(f"Request exceeded {self._config.timeout}s") from e
            if is_transient_status(response.status_code):
                raise TransientResponseError(response)
            return response

        try:
            return await retry_with_backoff(attempt, self._retry, operation_name="truelist_verify")
        except TransientResponseError as e:
            # Retries exhausted, hand the last response to the classifier
            return e.response
