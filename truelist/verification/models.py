"""Email verification models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

DISPOSABLE_SUB_STATE = "is_disposable"
ROLE_SUB_STATE = "is_role"


class EmailState(str, Enum):
    """Primary verdict reported by the verification service."""

    OK = "ok"  # Mailbox exists and accepts mail
    INVALID = "email_invalid"  # Undeliverable (bad syntax, no mailbox, no MX)
    ACCEPT_ALL = "accept_all"  # Domain accepts everything, mailbox unverifiable
    UNKNOWN = "unknown"  # Could not determine, or a local failure


class ValidationResult(BaseModel):
    """
    Verdict for a single email address.

    Immutable once built. ``error`` is only ever set on results synthesized
    locally after a failure, and such results always carry ``UNKNOWN``.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    state: EmailState
    sub_state: str | None = None
    domain: str | None = None
    canonical: str | None = None
    mx_record: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    verified_at: str | None = None
    suggestion: str | None = None
    error: bool = False

    @model_validator(mode="after")
    def _error_implies_unknown(self) -> "ValidationResult":
        if self.error and self.state != EmailState.UNKNOWN:
            raise ValueError("error results must have state 'unknown'")
        return self

    @classmethod
    def unknown_error(cls, email: str) -> "ValidationResult":
        """Build the result returned when failing open."""
        # Unvalidated: the submitted string is echoed back even if it is not valid unicode
        return cls.model_construct(email=email, state=EmailState.UNKNOWN, error=True)

    def is_valid(self) -> bool:
        return self.state == EmailState.OK

    def is_invalid(self) -> bool:
        return self.state == EmailState.INVALID

    def is_accept_all(self) -> bool:
        return self.state == EmailState.ACCEPT_ALL

    def is_risky(self) -> bool:
        """Accept-all domains are the risky, non-definitive verdict."""
        return self.is_accept_all()

    def is_unknown(self) -> bool:
        return self.state == EmailState.UNKNOWN

    def is_error(self) -> bool:
        return self.error

    def is_disposable(self) -> bool:
        return self.sub_state == DISPOSABLE_SUB_STATE

    def is_role(self) -> bool:
        return self.sub_state == ROLE_SUB_STATE

    def is_cacheable(self) -> bool:
        """Only genuine, definitive verdicts may be cached."""
        return not self.error and not self.is_unknown()

    def to_dict(self) -> dict[str, Any]:
        """Flat serialization for logging and telemetry."""
        return self.model_dump(mode="json")
