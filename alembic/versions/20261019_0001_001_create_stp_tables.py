"""Create STP tables.

Creates the staging table, the normalized trade tables and the reference
data tables read by parsers:
- message_in
- trade, trade_system_link, trade_workflow_event
- expiry_cut_rule, broker_mapping, portfolio_mapping

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BIGINT_PK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    """Upgrade database schema."""
    # ====================================
    # MESSAGE_IN - staged raw messages
    # ====================================
    op.create_table(
        "message_in",
        sa.Column("message_in_id", BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column("source_type", sa.String(10), nullable=False),
        sa.Column("source_venue_code", sa.String(50), nullable=False, server_default=""),
        sa.Column("session_key", sa.String(100), nullable=True),
        sa.Column("received_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("source_timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("parsed_flag", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("parsed_utc", sa.DateTime(timezone=True), nullable=True),
        sa.Column("parse_error", sa.Text(), nullable=True),
        sa.Column("raw_payload", sa.Text(), nullable=False),
        sa.Column("email_subject", sa.String(255), nullable=True),
        sa.Column("email_from", sa.String(255), nullable=True),
        sa.Column("email_to", sa.String(255), nullable=True),
        sa.Column("fix_msg_type", sa.String(10), nullable=True),
        sa.Column("fix_seq_num", sa.Integer(), nullable=True),
        sa.Column("external_counterparty_name", sa.String(100), nullable=True),
        sa.Column("external_trade_key", sa.String(100), nullable=True),
    )
    op.create_index("ix_message_in_parsed_flag", "message_in", ["parsed_flag", "message_in_id"])
    op.create_index("ix_message_in_source", "message_in", ["source_type", "source_venue_code"])

    # ====================================
    # TRADE
    # ====================================
    op.create_table(
        "trade",
        sa.Column("stp_trade_id", BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column("trade_id", sa.String(100), nullable=False),
        sa.Column("product_type", sa.String(20), nullable=False),
        sa.Column("source_type", sa.String(10), nullable=False),
        sa.Column("source_venue_code", sa.String(50), nullable=False),
        sa.Column(
            "message_in_id",
            BIGINT_PK,
            sa.ForeignKey("message_in.message_in_id"),
            nullable=True,
        ),
        sa.Column("counterparty_code", sa.String(50), nullable=False, server_default=""),
        sa.Column("broker_code", sa.String(50), nullable=True),
        sa.Column("trader_id", sa.String(50), nullable=False, server_default=""),
        sa.Column("inv_id", sa.String(50), nullable=True),
        sa.Column("reporting_entity_id", sa.String(50), nullable=True),
        sa.Column("currency_pair", sa.String(6), nullable=False),
        sa.Column("mic", sa.String(10), nullable=True),
        sa.Column("isin", sa.String(20), nullable=True),
        sa.Column("trade_date", sa.Date(), nullable=False),
        sa.Column("execution_time_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("buy_sell", sa.String(4), nullable=False),
        sa.Column("notional", sa.Numeric(20, 2), nullable=False),
        sa.Column("notional_currency", sa.String(3), nullable=False),
        sa.Column("settlement_date", sa.Date(), nullable=False),
        sa.Column("near_settlement_date", sa.Date(), nullable=True),
        sa.Column("is_non_deliverable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("fixing_date", sa.Date(), nullable=True),
        sa.Column("settlement_currency", sa.String(3), nullable=True),
        sa.Column("uti", sa.String(100), nullable=True),
        sa.Column("tvtic", sa.String(100), nullable=True),
        sa.Column("margin", sa.Numeric(20, 8), nullable=True),
        sa.Column("hedge_rate", sa.Numeric(20, 8), nullable=True),
        sa.Column("spot_rate", sa.Numeric(20, 8), nullable=True),
        sa.Column("swap_points", sa.Numeric(20, 8), nullable=True),
        sa.Column("hedge_type", sa.String(20), nullable=True),
        sa.Column("call_put", sa.String(10), nullable=True),
        sa.Column("strike", sa.Numeric(20, 8), nullable=True),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("cut", sa.String(20), nullable=True),
        sa.Column("premium", sa.Numeric(20, 2), nullable=True),
        sa.Column("premium_currency", sa.String(3), nullable=True),
        sa.Column("premium_date", sa.Date(), nullable=True),
        sa.Column("portfolio_mx3", sa.String(50), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_updated_utc", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_trade_trade_id", "trade", ["trade_id"])
    op.create_index("ix_trade_trade_date", "trade", ["trade_date"])
    op.create_index("ix_trade_message_in_id", "trade", ["message_in_id"])

    # ====================================
    # TRADE_SYSTEM_LINK
    # ====================================
    op.create_table(
        "trade_system_link",
        sa.Column("trade_system_link_id", BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column("stp_trade_id", BIGINT_PK, sa.ForeignKey("trade.stp_trade_id"), nullable=False),
        sa.Column("system_code", sa.String(20), nullable=False),
        sa.Column("external_trade_id", sa.String(100), nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="NEW"),
        sa.Column("error_code", sa.String(50), nullable=False, server_default=""),
        sa.Column("error_message", sa.Text(), nullable=False),
        sa.Column("portfolio_code", sa.String(50), nullable=True),
        sa.Column("book_flag", sa.Boolean(), nullable=True),
        sa.Column("stp_mode", sa.String(20), nullable=True),
        sa.Column("imported_by", sa.String(50), nullable=True),
        sa.Column("booked_by", sa.String(50), nullable=True),
        sa.Column("first_booked_utc", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_booked_utc", sa.DateTime(timezone=True), nullable=True),
        sa.Column("stp_flag", sa.Boolean(), nullable=True),
        sa.Column("created_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_updated_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(
        "ix_trade_system_link_trade_system", "trade_system_link", ["stp_trade_id", "system_code"]
    )
    op.create_index(
        "ix_trade_system_link_system_status", "trade_system_link", ["system_code", "status"]
    )

    # ====================================
    # TRADE_WORKFLOW_EVENT (append-only)
    # ====================================
    op.create_table(
        "trade_workflow_event",
        sa.Column("workflow_event_id", BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column("stp_trade_id", BIGINT_PK, sa.ForeignKey("trade.stp_trade_id"), nullable=False),
        sa.Column("event_time_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("system_code", sa.String(20), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("field_name", sa.String(100), nullable=True),
        sa.Column("old_value", sa.Text(), nullable=True),
        sa.Column("new_value", sa.Text(), nullable=True),
        sa.Column("initiator_id", sa.String(50), nullable=True),
    )
    op.create_index(
        "ix_trade_workflow_event_stp_trade_id", "trade_workflow_event", ["stp_trade_id"]
    )

    # ====================================
    # REFERENCE DATA
    # ====================================
    op.create_table(
        "expiry_cut_rule",
        sa.Column("expiry_cut_rule_id", BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column("currency_pair", sa.String(6), nullable=False, unique=True),
        sa.Column("expiry_cut", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "broker_mapping",
        sa.Column("broker_mapping_id", BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column("source_venue_code", sa.String(50), nullable=False),
        sa.Column("external_broker_code", sa.String(50), nullable=False),
        sa.Column("normalized_broker_code", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint(
            "source_venue_code", "external_broker_code", name="uq_broker_mapping_venue_code"
        ),
    )

    op.create_table(
        "portfolio_mapping",
        sa.Column("portfolio_mapping_id", BIGINT_PK, primary_key=True, autoincrement=True),
        sa.Column("system_code", sa.String(20), nullable=False),
        sa.Column("currency_pair", sa.String(6), nullable=False),
        sa.Column("product_type", sa.String(20), nullable=False),
        sa.Column("portfolio_code", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint(
            "system_code", "currency_pair", "product_type", name="uq_portfolio_mapping_key"
        ),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("portfolio_mapping")
    op.drop_table("broker_mapping")
    op.drop_table("expiry_cut_rule")

    op.drop_index("ix_trade_workflow_event_stp_trade_id", table_name="trade_workflow_event")
    op.drop_table("trade_workflow_event")

    op.drop_index("ix_trade_system_link_system_status", table_name="trade_system_link")
    op.drop_index("ix_trade_system_link_trade_system", table_name="trade_system_link")
    op.drop_table("trade_system_link")

    op.drop_index("ix_trade_message_in_id", table_name="trade")
    op.drop_index("ix_trade_trade_date", table_name="trade")
    op.drop_index("ix_trade_trade_id", table_name="trade")
    op.drop_table("trade")

    op.drop_index("ix_message_in_source", table_name="message_in")
    op.drop_index("ix_message_in_parsed_flag", table_name="message_in")
    op.drop_table("message_in")
