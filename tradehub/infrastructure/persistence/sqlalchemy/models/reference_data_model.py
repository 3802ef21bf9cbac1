"""Reference data ORM Models - lookup tables read by parsers."""

from sqlalchemy import Boolean, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPK


class ExpiryCutRuleModel(Base):
    """Currency pair → expiry cut (e.g. EURSEK → NY)."""

    __tablename__ = "expiry_cut_rule"

    expiry_cut_rule_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    currency_pair: Mapped[str] = mapped_column(String(6), nullable=False, unique=True)
    expiry_cut: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class BrokerMappingModel(Base):
    """Venue + external broker code → normalized broker code."""

    __tablename__ = "broker_mapping"

    broker_mapping_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    source_venue_code: Mapped[str] = mapped_column(String(50), nullable=False)
    external_broker_code: Mapped[str] = mapped_column(String(50), nullable=False)
    normalized_broker_code: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("source_venue_code", "external_broker_code", name="uq_broker_mapping_venue_code"),
    )


class PortfolioMappingModel(Base):
    """System + currency pair + product type → booking portfolio."""

    __tablename__ = "portfolio_mapping"

    portfolio_mapping_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    system_code: Mapped[str] = mapped_column(String(20), nullable=False)
    currency_pair: Mapped[str] = mapped_column(String(6), nullable=False)
    product_type: Mapped[str] = mapped_column(String(20), nullable=False)
    portfolio_code: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint(
            "system_code", "currency_pair", "product_type", name="uq_portfolio_mapping_key"
        ),
    )
