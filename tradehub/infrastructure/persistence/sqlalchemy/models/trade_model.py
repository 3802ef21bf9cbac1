"""Trade ORM Models - trade, trade_system_link and trade_workflow_event."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPK


class TradeModel(Base):
    """ORM model for Trade.

    Persistence ONLY - no business logic here.
    """

    __tablename__ = "trade"

    stp_trade_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    trade_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    product_type: Mapped[str] = mapped_column(String(20), nullable=False)

    source_type: Mapped[str] = mapped_column(String(10), nullable=False)
    source_venue_code: Mapped[str] = mapped_column(String(50), nullable=False)
    message_in_id: Mapped[int | None] = mapped_column(
        BigIntPK, ForeignKey("message_in.message_in_id"), nullable=True, index=True
    )

    counterparty_code: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    broker_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    trader_id: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    inv_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reporting_entity_id: Mapped[str | None] = mapped_column(String(50), nullable=True)

    currency_pair: Mapped[str] = mapped_column(String(6), nullable=False)
    mic: Mapped[str | None] = mapped_column(String(10), nullable=True)
    isin: Mapped[str | None] = mapped_column(String(20), nullable=True)
    trade_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    execution_time_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    buy_sell: Mapped[str] = mapped_column(String(4), nullable=False)

    notional: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    notional_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    settlement_date: Mapped[date] = mapped_column(Date, nullable=False)
    near_settlement_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_non_deliverable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    fixing_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    settlement_currency: Mapped[str | None] = mapped_column(String(3), nullable=True)

    uti: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tvtic: Mapped[str | None] = mapped_column(String(100), nullable=True)

    margin: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=8), nullable=True)
    hedge_rate: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=8), nullable=True)
    spot_rate: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=8), nullable=True)
    swap_points: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=8), nullable=True)
    hedge_type: Mapped[str | None] = mapped_column(String(20), nullable=True)

    call_put: Mapped[str | None] = mapped_column(String(10), nullable=True)
    strike: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=8), nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    cut: Mapped[str | None] = mapped_column(String(20), nullable=True)
    premium: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=2), nullable=True)
    premium_currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    premium_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    portfolio_mx3: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_updated_utc: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<TradeModel(stp_trade_id={self.stp_trade_id}, trade_id={self.trade_id}, "
            f"product_type={self.product_type}, currency_pair={self.currency_pair})>"
        )


class TradeSystemLinkModel(Base):
    """ORM model for TradeSystemLink."""

    __tablename__ = "trade_system_link"

    trade_system_link_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    stp_trade_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("trade.stp_trade_id"), nullable=False
    )
    system_code: Mapped[str] = mapped_column(String(20), nullable=False)
    external_trade_id: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="NEW")
    error_code: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    error_message: Mapped[str] = mapped_column(Text, nullable=False, default="")

    portfolio_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    book_flag: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    stp_mode: Mapped[str | None] = mapped_column(String(20), nullable=True)
    imported_by: Mapped[str | None] = mapped_column(String(50), nullable=True)
    booked_by: Mapped[str | None] = mapped_column(String(50), nullable=True)
    first_booked_utc: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_booked_utc: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    stp_flag: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    created_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_updated_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_trade_system_link_trade_system", "stp_trade_id", "system_code"),
        Index("ix_trade_system_link_system_status", "system_code", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<TradeSystemLinkModel(trade_system_link_id={self.trade_system_link_id}, "
            f"stp_trade_id={self.stp_trade_id}, system_code={self.system_code}, status={self.status})>"
        )


class TradeWorkflowEventModel(Base):
    """ORM model for TradeWorkflowEvent (append-only)."""

    __tablename__ = "trade_workflow_event"

    workflow_event_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    stp_trade_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("trade.stp_trade_id"), nullable=False, index=True
    )
    event_time_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    system_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    field_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    initiator_id: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<TradeWorkflowEventModel(workflow_event_id={self.workflow_event_id}, "
            f"stp_trade_id={self.stp_trade_id}, event_type={self.event_type})>"
        )
