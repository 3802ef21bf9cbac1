"""Trade mappers - Trade, TradeSystemLink and TradeWorkflowEvent → ORM models.

Enum-valued fields are stored as their upper-case string values.
"""

from datetime import datetime, timezone

from tradehub.domain.trading.entities import (
    Trade,
    TradeSystemLink,
    TradeSystemSummary,
    TradeWorkflowEvent,
)
from tradehub.domain.trading.value_objects import (
    BuySell,
    ProductType,
    SystemCode,
    TradeSystemStatus,
)
from tradehub.infrastructure.persistence.sqlalchemy.models import (
    TradeModel,
    TradeSystemLinkModel,
    TradeWorkflowEventModel,
)


class TradeMapper:
    """Mapper for the trade bundle entities.

    Example:
        >>> mapper = TradeMapper()
        >>> model = mapper.to_model(trade)
        >>> session.add(model)
        >>> await session.flush()  # Get stp_trade_id
    """

    def to_model(self, entity: Trade) -> TradeModel:
        """Convert Trade (domain entity) → TradeModel (ORM)."""
        return TradeModel(
            stp_trade_id=entity.stp_trade_id,
            trade_id=entity.trade_id,
            product_type=entity.product_type.value,
            source_type=entity.source_type,
            source_venue_code=entity.source_venue_code,
            message_in_id=entity.message_in_id,
            counterparty_code=entity.counterparty_code,
            broker_code=entity.broker_code,
            trader_id=entity.trader_id,
            inv_id=entity.inv_id,
            reporting_entity_id=entity.reporting_entity_id,
            currency_pair=entity.currency_pair,
            mic=entity.mic,
            isin=entity.isin,
            trade_date=entity.trade_date,
            execution_time_utc=entity.execution_time_utc,
            buy_sell=entity.buy_sell.value,
            notional=entity.notional,
            notional_currency=entity.notional_currency,
            settlement_date=entity.settlement_date,
            near_settlement_date=entity.near_settlement_date,
            is_non_deliverable=entity.is_non_deliverable,
            fixing_date=entity.fixing_date,
            settlement_currency=entity.settlement_currency,
            uti=entity.uti,
            tvtic=entity.tvtic,
            margin=entity.margin,
            hedge_rate=entity.hedge_rate,
            spot_rate=entity.spot_rate,
            swap_points=entity.swap_points,
            hedge_type=entity.hedge_type,
            call_put=entity.call_put,
            strike=entity.strike,
            expiry_date=entity.expiry_date,
            cut=entity.cut,
            premium=entity.premium,
            premium_currency=entity.premium_currency,
            premium_date=entity.premium_date,
            portfolio_mx3=entity.portfolio_mx3,
            is_deleted=entity.is_deleted,
            last_updated_utc=entity.last_updated_utc or datetime.now(timezone.utc),
        )

    def link_to_model(self, entity: TradeSystemLink) -> TradeSystemLinkModel:
        """Convert TradeSystemLink (domain entity) → TradeSystemLinkModel (ORM)."""
        return TradeSystemLinkModel(
            trade_system_link_id=entity.trade_system_link_id,
            stp_trade_id=entity.stp_trade_id,
            system_code=entity.system_code.value,
            external_trade_id=entity.external_trade_id,
            status=entity.status.value,
            error_code=entity.error_code,
            error_message=entity.error_message,
            portfolio_code=entity.portfolio_code,
            book_flag=entity.book_flag,
            stp_mode=entity.stp_mode,
            imported_by=entity.imported_by,
            booked_by=entity.booked_by,
            first_booked_utc=entity.first_booked_utc,
            last_booked_utc=entity.last_booked_utc,
            stp_flag=entity.stp_flag,
            created_utc=entity.created_utc,
            last_updated_utc=entity.last_updated_utc,
            is_deleted=entity.is_deleted,
        )

    def event_to_model(self, entity: TradeWorkflowEvent) -> TradeWorkflowEventModel:
        """Convert TradeWorkflowEvent (domain entity) → TradeWorkflowEventModel (ORM)."""
        return TradeWorkflowEventModel(
            stp_trade_id=entity.stp_trade_id,
            event_time_utc=entity.event_time_utc,
            event_type=entity.event_type,
            system_code=entity.system_code.value if entity.system_code else None,
            description=entity.description,
            field_name=entity.field_name,
            old_value=entity.old_value,
            new_value=entity.new_value,
            initiator_id=entity.initiator_id,
        )

    def to_summary(
        self, trade: TradeModel, link: TradeSystemLinkModel
    ) -> TradeSystemSummary:
        """Build the read-model row from a joined (trade, link) pair."""
        return TradeSystemSummary(
            stp_trade_id=trade.stp_trade_id,
            trade_id=trade.trade_id,
            product_type=ProductType(trade.product_type.upper()),
            currency_pair=trade.currency_pair,
            trade_date=trade.trade_date,
            execution_time_utc=trade.execution_time_utc,
            buy_sell=BuySell(trade.buy_sell.upper()),
            notional=trade.notional,
            notional_currency=trade.notional_currency,
            trade_system_link_id=link.trade_system_link_id,
            system_code=SystemCode(link.system_code.upper()),
            status=TradeSystemStatus(link.status.upper()),
        )
