"""Translate Truelist API response bodies into ValidationResults.

The API answers with one entry per submitted address::

    {
        "emails": [
            {
                "address": "user@example.com",
                "domain": "example.com",
                "canonical": "user",
                "mx_record": "mx.example.com",
                "first_name": null,
                "last_name": null,
                "email_state": "ok",
                "email_sub_state": "email_ok",
                "verified_at": "2024-01-01T00:00:00.000Z",
                "did_you_mean": null
            }
        ]
    }

This is the only module that knows the field names of the wire format.
"""

import json
from typing import Any

from .errors import ApiError
from .models import EmailState, ValidationResult

# Wire field -> ValidationResult field for the optional enrichment data
_ENRICHMENT_FIELDS = {
    "email_sub_state": "sub_state",
    "domain": "domain",
    "canonical": "canonical",
    "mx_record": "mx_record",
    "first_name": "first_name",
    "last_name": "last_name",
    "verified_at": "verified_at",
    "did_you_mean": "suggestion",
}

_KNOWN_STATES = {state.value: state for state in EmailState}


def parse_state(value: Any) -> EmailState:
    """Map a raw state value to EmailState; anything unrecognized is UNKNOWN."""
    if isinstance(value, str):
        return _KNOWN_STATES.get(value.strip().lower(), EmailState.UNKNOWN)
    return EmailState.UNKNOWN


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_response(email: str, body: str | bytes) -> ValidationResult:
    """
    Parse a successful response body.

    Args:
        email: The address that was submitted
        body: Raw response body

    Returns:
        ValidationResult for the first entry of ``emails``

    Raises:
        ApiError: If the body is not JSON or does not have the expected shape
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ApiError("Invalid JSON response from API") from e

    if not isinstance(data, dict):
        raise ApiError("Invalid JSON response from API: expected an object")

    entries = data.get("emails")
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
        raise ApiError("Invalid response from API: missing 'emails' entry")

    return parse_entry(email, entries[0])


def parse_entry(email: str, entry: dict[str, Any]) -> ValidationResult:
    """Parse a single per-address entry."""
    fields = {
        target: _optional_str(entry.get(source)) for source, target in _ENRICHMENT_FIELDS.items()
    }
    return ValidationResult(
        email=_optional_str(entry.get("address")) or email,
        state=parse_state(entry.get("email_state")),
        **fields,
    )
