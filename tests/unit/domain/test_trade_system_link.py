"""Unit tests for TradeSystemLink booking lifecycle."""

from datetime import datetime, timezone

import pytest

from tradehub.domain.shared import BusinessRuleViolation, InvalidStateTransition
from tradehub.domain.trading.entities import TradeSystemLink, TradeWorkflowEvent
from tradehub.domain.trading.value_objects import SystemCode, TradeSystemStatus


class TestTradeSystemLink:
    def test_new_link_is_unbound(self):
        link = TradeSystemLink(system_code=SystemCode.MX3)

        assert link.status is TradeSystemStatus.NEW
        assert link.is_bound is False
        assert link.last_error is None

    def test_for_trade_returns_bound_copy(self):
        link = TradeSystemLink(system_code=SystemCode.CALYPSO, portfolio_code="FXOPT")

        bound = link.for_trade(42)

        assert bound.stp_trade_id == 42
        assert bound.portfolio_code == "FXOPT"
        assert link.stp_trade_id is None

    def test_error_status_requires_message_on_construction(self):
        with pytest.raises(BusinessRuleViolation):
            TradeSystemLink(system_code=SystemCode.MX3, status=TradeSystemStatus.ERROR)

    def test_booking_flow_sets_booked_timestamps(self):
        """Test NEW → PENDING → BOOKED → READY_TO_ACK → ACK_SENT."""
        # Arrange
        link = TradeSystemLink(system_code=SystemCode.MX3).for_trade(1)
        booked_at = datetime(2025, 3, 3, 12, 0, tzinfo=timezone.utc)

        # Act
        link.transition_to(TradeSystemStatus.PENDING)
        link.transition_to(TradeSystemStatus.BOOKED, external_trade_id="MX-991", now=booked_at)
        link.transition_to(TradeSystemStatus.READY_TO_ACK)
        link.transition_to(TradeSystemStatus.ACK_SENT)

        # Assert
        assert link.status is TradeSystemStatus.ACK_SENT
        assert link.status.is_final()
        assert link.external_trade_id == "MX-991"
        assert link.first_booked_utc == booked_at
        assert link.last_booked_utc == booked_at

    def test_backward_transition_rejected(self):
        link = TradeSystemLink(system_code=SystemCode.MX3, status=TradeSystemStatus.BOOKED)

        with pytest.raises(InvalidStateTransition):
            link.transition_to(TradeSystemStatus.PENDING)

        assert link.status is TradeSystemStatus.BOOKED

    def test_error_transition_requires_message(self):
        link = TradeSystemLink(system_code=SystemCode.RTNS)

        with pytest.raises(BusinessRuleViolation):
            link.transition_to(TradeSystemStatus.ERROR, error_code="E42")

        link.transition_to(TradeSystemStatus.ERROR, error_code="E42", error_message="Unknown portfolio")
        assert link.last_error == "E42: Unknown portfolio"

    def test_ack_error_can_be_resent(self):
        link = TradeSystemLink(system_code=SystemCode.VOLBROKER_STP, status=TradeSystemStatus.READY_TO_ACK)

        link.transition_to(TradeSystemStatus.ACK_ERROR, error_message="Timeout")
        link.transition_to(TradeSystemStatus.ACK_SENT)

        assert link.status is TradeSystemStatus.ACK_SENT
        assert link.error_message == ""


class TestTradeWorkflowEvent:
    def test_event_is_immutable_and_bound_by_copy(self):
        event = TradeWorkflowEvent(event_type="WARNING", field_name="Cut", old_value="NYC", new_value="")

        bound = event.for_trade(9)

        assert bound.stp_trade_id == 9
        assert event.stp_trade_id is None
        assert bound.has_field_change is True
        with pytest.raises(AttributeError):
            event.description = "changed"
