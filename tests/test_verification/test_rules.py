"""Tests for the deliverability rule adapter."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from truelist.config import TruelistConfig
from truelist.verification import (
    AuthenticationError,
    DeliverableRule,
    EmailState,
    ValidationResult,
    is_deliverable,
)


def _result(state: EmailState, error: bool = False) -> ValidationResult:
    return ValidationResult(email="user@example.com", state=state, error=error)


@pytest.fixture
def mock_client():
    """Create a mock client with a configurable verdict."""
    client = MagicMock()
    client.config = TruelistConfig(api_key="test-key", allow_risky=True)
    client.validate = AsyncMock(return_value=_result(EmailState.OK))
    return client


class TestIsDeliverable:
    """Tests for the is_deliverable policy."""

    def test_valid_passes(self):
        assert is_deliverable(_result(EmailState.OK)) is True

    def test_invalid_fails(self):
        assert is_deliverable(_result(EmailState.INVALID)) is False

    def test_unknown_passes(self):
        assert is_deliverable(_result(EmailState.UNKNOWN)) is True

    def test_error_passes(self):
        assert is_deliverable(_result(EmailState.UNKNOWN, error=True), allow_risky=False) is True

    def test_accept_all_depends_on_allow_risky(self):
        assert is_deliverable(_result(EmailState.ACCEPT_ALL), allow_risky=True) is True
        assert is_deliverable(_result(EmailState.ACCEPT_ALL), allow_risky=False) is False


class TestDeliverableRule:
    """Tests for DeliverableRule."""

    @pytest.mark.asyncio
    async def test_passes_deliverable_address(self, mock_client):
        assert await DeliverableRule(mock_client).check("user@example.com") is True

    @pytest.mark.asyncio
    async def test_rejects_invalid_address(self, mock_client):
        mock_client.validate.return_value = _result(EmailState.INVALID)

        assert await DeliverableRule(mock_client).check("bad@example.com") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, "", "   "])
    async def test_empty_values_pass_without_a_call(self, mock_client, value):
        assert await DeliverableRule(mock_client).check(value) is True
        mock_client.validate.assert_not_called()

    @pytest.mark.asyncio
    async def test_allow_risky_defaults_to_client_config(self, mock_client):
        mock_client.validate.return_value = _result(EmailState.ACCEPT_ALL)
        mock_client.config = TruelistConfig(api_key="test-key", allow_risky=False)

        assert await DeliverableRule(mock_client).check("info@example.com") is False

    @pytest.mark.asyncio
    async def test_allow_risky_override(self, mock_client):
        mock_client.validate.return_value = _result(EmailState.ACCEPT_ALL)

        rule = DeliverableRule(mock_client, allow_risky=False)

        assert rule.allow_risky is False
        assert await rule.check("info@example.com") is False

    @pytest.mark.asyncio
    async def test_authentication_error_propagates(self, mock_client):
        mock_client.validate.side_effect = AuthenticationError("Invalid API key")

        with pytest.raises(AuthenticationError):
            await DeliverableRule(mock_client).check("user@example.com")

    def test_message(self, mock_client):
        rule = DeliverableRule(mock_client)

        assert rule.message("work_email") == "The work_email is not a deliverable email address."
