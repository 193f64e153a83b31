"""Form-validation adapter built on top of TruelistClient verdicts."""

from .client import TruelistClient
from .models import EmailState, ValidationResult

DEFAULT_MESSAGE = "The {attribute} is not a deliverable email address."


def is_deliverable(result: ValidationResult, allow_risky: bool = True) -> bool:
    """
    Decide whether a verdict should pass a deliverability check.

    Errors and unknown verdicts pass (fail open). Accept-all domains pass
    only when ``allow_risky`` is set. Only INVALID is always rejected.
    """
    if result.is_error() or result.is_unknown():
        return True
    if result.state == EmailState.ACCEPT_ALL:
        return allow_risky
    return result.is_valid()


class DeliverableRule:
    """
    Rejects addresses the verification service reports as undeliverable.

    AuthenticationError from the client is not caught: a bad key must
    surface instead of silently passing every address.
    """

    def __init__(self, client: TruelistClient, allow_risky: bool | None = None) -> None:
        self._client = client
        self._allow_risky = allow_risky

    @property
    def allow_risky(self) -> bool:
        if self._allow_risky is not None:
            return self._allow_risky
        return self._client.config.allow_risky

    async def check(self, value: str | None) -> bool:
        """Return True if the value passes; empty values are left to other rules."""
        if not value or not value.strip():
            return True

        result = await self._client.validate(value)
        return is_deliverable(result, self.allow_risky)

    def message(self, attribute: str = "email") -> str:
        return DEFAULT_MESSAGE.format(attribute=attribute)
