"""MessageIn ORM Model - staging table of raw inbound messages."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPK


class MessageInModel(Base):
    """ORM model for InboundMessage.

    Persistence ONLY - no business logic here.
    Business logic lives in domain.messages.entities.InboundMessage.
    """

    __tablename__ = "message_in"

    message_in_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    # Source
    source_type: Mapped[str] = mapped_column(String(10), nullable=False)  # MAIL / FIX / API / FILE
    source_venue_code: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    session_key: Mapped[str | None] = mapped_column(String(100), nullable=True)
    received_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    source_timestamp: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Parse state
    parsed_flag: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parsed_utc: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    parse_error: Mapped[str | None] = mapped_column(Text, nullable=True)

    raw_payload: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Mail
    email_subject: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email_from: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email_to: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # FIX
    fix_msg_type: Mapped[str | None] = mapped_column(String(10), nullable=True)
    fix_seq_num: Mapped[int | None] = mapped_column(Integer, nullable=True)

    external_counterparty_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    external_trade_key: Mapped[str | None] = mapped_column(String(100), nullable=True)

    __table_args__ = (
        # Batch puller: WHERE parsed_flag = false ORDER BY message_in_id
        Index("ix_message_in_parsed_flag", "parsed_flag", "message_in_id"),
        Index("ix_message_in_source", "source_type", "source_venue_code"),
    )

    def __repr__(self) -> str:
        return (
            f"<MessageInModel(message_in_id={self.message_in_id}, "
            f"source_type={self.source_type}, parsed_flag={self.parsed_flag})>"
        )
