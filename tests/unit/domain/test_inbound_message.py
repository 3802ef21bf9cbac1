"""Unit tests for InboundMessage entity."""

from datetime import datetime, timezone

import pytest

from fakes import make_message
from tradehub.domain.shared import BusinessRuleViolation


class TestInboundMessage:
    def test_new_message_can_be_processed(self):
        message = make_message()

        assert message.can_process is True
        assert message.parse_succeeded is False
        assert message.parsed_utc is None

    def test_mark_parsed_sets_flag_timestamp_and_clears_error(self):
        """Test success writeback state."""
        # Arrange
        message = make_message(parse_error="stale")
        now = datetime(2025, 3, 3, 10, 0, tzinfo=timezone.utc)

        # Act
        message.mark_parsed(now=now)

        # Assert
        assert message.parsed_flag is True
        assert message.parsed_utc == now
        assert message.parse_error is None
        assert message.parse_succeeded is True
        assert message.can_process is False

    def test_mark_failed_keeps_error_alongside_parsed_flag(self):
        message = make_message()

        message.mark_failed("No parser available for this message.")

        assert message.parsed_flag is True
        assert message.parsed_utc is not None
        assert message.parse_error == "No parser available for this message."
        assert message.parse_succeeded is False

    @pytest.mark.parametrize("error", ["", "   "])
    def test_mark_failed_requires_diagnostic(self, error):
        message = make_message(id=7)

        with pytest.raises(BusinessRuleViolation) as exc_info:
            message.mark_failed(error)

        assert exc_info.value.context == {"message_in_id": 7}
        assert message.parsed_flag is False

    def test_equality_by_id(self):
        assert make_message(id=1) == make_message(id=1, source_type="MAIL")
        assert make_message(id=1) != make_message(id=2)
        assert make_message() != make_message()
