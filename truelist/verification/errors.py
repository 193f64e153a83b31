"""Error taxonomy for the verification client and the pure classifiers that produce it."""

import httpx


class TruelistError(Exception):
    """Base class for all errors raised by the client."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(TruelistError):
    """Missing or rejected API key. Never converted into a fail-open result."""


class RateLimitError(TruelistError):
    """The service answered 429 Too Many Requests."""


class ApiError(TruelistError):
    """Unexpected status, malformed body or transport-level failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, status_code)
        self.body = body


# Bodies can be large HTML error pages; keep enough for diagnostics
_MAX_BODY_CHARS = 500


def classify_response(response: httpx.Response) -> TruelistError | None:
    """
    Map an HTTP response to a typed error.

    Returns None for any 2xx response.
    """
    status = response.status_code
    if 200 <= status < 300:
        return None
    if status == 401:
        return AuthenticationError(
            "Invalid API key. Check your Truelist API key configuration.",
            status_code=status,
        )
    if status == 429:
        return RateLimitError("Rate limit exceeded", status_code=status)

    body = response.text[:_MAX_BODY_CHARS]
    return ApiError(f"API returned {status}: {body}", status_code=status, body=body)


def classify_exception(exc: BaseException) -> TruelistError:
    """Map a transport failure (or an already typed error) to a typed error."""
    if isinstance(exc, TruelistError):
        return exc
    if isinstance(exc, httpx.TimeoutException):
        message = f"Request timed out: {exc}"
    elif isinstance(exc, httpx.TransportError):
        message = f"Connection failed: {exc}"
    else:
        message = str(exc) or exc.__class__.__name__
    error = ApiError(message)
    error.__cause__ = exc
    return error
