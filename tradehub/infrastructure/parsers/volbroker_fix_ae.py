"""VolbrokerFixAeParser - Volbroker FIX TradeCaptureReport (35=AE).

One AE message describes a package of legs (typically an option and its
delta hedge forward). Each leg becomes its own Trade bundle.

Header tags:
    55 symbol, 30 MIC, 818/571/17 trade key, 75 trade date, 60 transact time,
    194 spot, 195 forward points, 1903 UTI prefix, 54 side

Leg tags (a leg starts at 600):
    609 security type, 624 side, 620 tenor, 764 call/put, 942 strike ccy,
    612 strike, 611 expiry, 598 venue cut, 687 notional (millions),
    556 notional ccy, 614 premium, 602 ISIN, 2893 leg UTI, 248 settlement,
    637 hedge rate, 688/689 party id pairs (688=USI carries the TVTIC)
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from tradehub.domain.messages.entities import InboundMessage
from tradehub.domain.parsing import InboundMessageParser, ParseResult, TradeBundle
from tradehub.domain.trading.entities import Trade, TradeWorkflowEvent
from tradehub.domain.trading.repositories import StpLookupRepository
from tradehub.domain.trading.value_objects import BuySell, ProductType, SystemCode

from .fix_tags import (
    FixTag,
    first_tag_value,
    get_tag_value,
    parse_decimal,
    parse_fix_date,
    parse_fix_tags,
    parse_fix_timestamp,
    split_leg_groups,
)

logger = logging.getLogger(__name__)

VOLBROKER_VENUE = "VOLBROKER"
NOTIONAL_MULTIPLIER = Decimal("1000000")
UTI_PREFIX_LENGTH = 20
FORWARD_HEDGE_TYPE = "Forward"

_HEADER_SIDES = {"1": BuySell.BUY, "2": BuySell.SELL}
_LEG_SIDES = {"B": BuySell.BUY, "C": BuySell.SELL, "S": BuySell.SELL}

_LEG_FIELDS = {
    609: "security_type",
    624: "side",
    620: "tenor",
    764: "call_put",
    942: "strike_currency",
    612: "strike",
    611: "expiry",
    598: "venue_cut",
    687: "notional",
    556: "notional_currency",
    614: "premium",
    602: "isin",
    2893: "leg_uti",
    248: "settlement_date",
    637: "hedge_rate",
}


@dataclass
class _AeLeg:
    """Raw string fields of one leg; conversion happens when the trade is built."""

    security_type: str | None = None
    side: str | None = None
    tenor: str | None = None
    call_put: str | None = None
    strike_currency: str | None = None
    strike: str | None = None
    expiry: str | None = None
    venue_cut: str | None = None
    notional: str | None = None
    notional_currency: str | None = None
    premium: str | None = None
    isin: str | None = None
    leg_uti: str | None = None
    settlement_date: str | None = None
    hedge_rate: str | None = None
    tvtic: str | None = None

    @classmethod
    def from_tags(cls, tags: list[FixTag]) -> "_AeLeg":
        leg = cls()
        qualifier: str | None = None

        for fix_tag in tags:
            if fix_tag.tag == 688:
                qualifier = fix_tag.value
            elif fix_tag.tag == 689:
                if qualifier and qualifier.strip().upper() == "USI":
                    leg.tvtic = fix_tag.value
            elif fix_tag.tag in _LEG_FIELDS:
                setattr(leg, _LEG_FIELDS[fix_tag.tag], fix_tag.value)

        return leg

    def buy_sell(self, fallback: BuySell | None) -> BuySell | None:
        """Leg side from 624, falling back to the header side (54)."""
        return _LEG_SIDES.get((self.side or "").strip().upper(), fallback)

    @property
    def product_type(self) -> ProductType:
        # OPT and anything unrecognised book as vanilla options
        if self.security_type and self.security_type.strip().upper() == "FWD":
            return ProductType.FWD
        return ProductType.OPTION_VANILLA


@dataclass(frozen=True)
class _AeHeader:
    currency_pair: str
    mic: str | None
    trade_key: str
    trade_date: date
    execution_time_utc: datetime
    spot_rate: Decimal | None
    forward_points: Decimal | None
    uti_prefix: str
    side: BuySell | None


def map_call_put_to_base(raw_call_put: str | None, currency_pair: str, strike_currency: str | None) -> str | None:
    """Express a call/put flag against the base currency of the pair.

    Volbroker states 764 relative to the strike currency (942). A call on the
    quote currency is a put on the base currency and vice versa.

    Example:
        >>> map_call_put_to_base("C", "USDJPY", "JPY")
        'Put'
        >>> map_call_put_to_base("C", "USDJPY", "USD")
        'Call'
    """
    if not raw_call_put or not raw_call_put.strip():
        return None

    flag = raw_call_put.strip().upper()
    direct = {"C": "Call", "P": "Put"}.get(flag)
    if direct is None:
        return None

    pair = currency_pair.replace("/", "").strip().upper()
    if len(pair) != 6 or not strike_currency or not strike_currency.strip():
        return direct

    if strike_currency.strip().upper() == pair[3:]:
        return "Put" if flag == "C" else "Call"
    return direct


class VolbrokerFixAeParser(InboundMessageParser):
    """Parser for Volbroker FIX AE trade capture reports.

    Reference data (expiry cut, broker, MX3 portfolio) is read through the
    lookup repository. A missing cut mapping does not fail the message; the
    option trade gets an empty cut and a WARNING workflow event.

    Example:
        >>> parser = VolbrokerFixAeParser(lookups)
        >>> parser.can_parse(message)
        True
        >>> result = await parser.parse(message)
        >>> [b.trade.product_type for b in result.trades]
        [<ProductType.OPTION_VANILLA: 'OPTION_VANILLA'>, <ProductType.FWD: 'FWD'>]
    """

    name = "volbroker_fix_ae"

    def __init__(self, lookup_repository: StpLookupRepository, initiator_id: str = "VolbrokerFixAeParser") -> None:
        """Initialize parser.

        Args:
            lookup_repository: Reference data for cut, broker and portfolio.
            initiator_id: Initiator stamped on workflow events this parser creates.
        """
        if lookup_repository is None:
            raise ValueError("lookup_repository is required")
        self._lookups = lookup_repository
        self._initiator_id = initiator_id

    def can_parse(self, message: InboundMessage) -> bool:
        return (
            (message.source_type or "").upper() == "FIX"
            and (message.source_venue_code or "").upper() == VOLBROKER_VENUE
            and (message.fix_msg_type or "").upper() == "AE"
        )

    async def parse(self, message: InboundMessage) -> ParseResult:
        if not message.raw_payload or not message.raw_payload.strip():
            return ParseResult.failed("Raw payload is empty.")

        tags = parse_fix_tags(message.raw_payload)
        if not tags:
            return ParseResult.failed("No FIX tags found in raw payload.")

        header = self._parse_header(tags, message)
        legs = [_AeLeg.from_tags(group) for group in split_leg_groups(tags)]
        if not legs:
            return ParseResult.failed("No legs found in AE message.")

        for number, leg in enumerate(legs, start=1):
            if leg.buy_sell(header.side) is None:
                return ParseResult.failed(f"Leg {number} has no side (624) and header has no side (54).")

        cut = await self._lookup_cut(header.currency_pair)
        broker_code = await self._lookup_broker(message.source_venue_code)
        portfolio_mx3 = None
        if header.currency_pair:
            portfolio_mx3 = await self._lookups.get_portfolio_code(
                SystemCode.MX3, header.currency_pair, ProductType.OPTION_VANILLA
            )

        bundles = [
            self._build_bundle(message, header, leg, cut, broker_code, portfolio_mx3)
            for leg in legs
        ]

        logger.debug(
            "volbroker_fix_ae.parsed",
            extra={
                "message_in_id": message.id,
                "trade_key": header.trade_key,
                "legs": len(bundles),
                "cut_mapped": cut is not None,
            },
        )
        return ParseResult.ok(bundles)

    # ------------------------------------------------------------------
    # Header / lookups
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_header(tags: list[FixTag], message: InboundMessage) -> _AeHeader:
        currency_pair = (get_tag_value(tags, 55) or "").replace("/", "").strip().upper()

        trade_date = parse_fix_date(get_tag_value(tags, 75)) or message.received_utc.date()
        execution_time = (
            parse_fix_timestamp(get_tag_value(tags, 60))
            or message.source_timestamp
            or message.received_utc
        )

        uti_prefix = (get_tag_value(tags, 1903) or "").strip()[:UTI_PREFIX_LENGTH]

        return _AeHeader(
            currency_pair=currency_pair,
            mic=get_tag_value(tags, 30),
            trade_key=first_tag_value(tags, 818, 571, 17) or "",
            trade_date=trade_date,
            execution_time_utc=execution_time,
            spot_rate=parse_decimal(get_tag_value(tags, 194)),
            forward_points=parse_decimal(get_tag_value(tags, 195)),
            uti_prefix=uti_prefix,
            side=_HEADER_SIDES.get(get_tag_value(tags, 54) or ""),
        )

    async def _lookup_cut(self, currency_pair: str) -> str | None:
        if not currency_pair:
            return None
        rule = await self._lookups.get_expiry_cut_by_currency_pair(currency_pair)
        if rule is None or not rule.is_active or not rule.expiry_cut.strip():
            return None
        return rule.expiry_cut

    async def _lookup_broker(self, source_venue_code: str) -> str | None:
        if not source_venue_code:
            return None
        # The venue is its own external broker code until AE carries a broker party
        mapping = await self._lookups.get_broker_mapping(source_venue_code, source_venue_code)
        if mapping is not None and mapping.is_active:
            return mapping.normalized_broker_code
        return source_venue_code

    # ------------------------------------------------------------------
    # Trade construction
    # ------------------------------------------------------------------

    def _build_bundle(
        self,
        message: InboundMessage,
        header: _AeHeader,
        leg: _AeLeg,
        cut: str | None,
        broker_code: str | None,
        portfolio_mx3: str | None,
    ) -> TradeBundle:
        product_type = leg.product_type

        notional = parse_decimal(leg.notional)
        settlement_date = parse_fix_date(leg.settlement_date) or header.trade_date

        trade = Trade(
            trade_id=header.trade_key,
            product_type=product_type,
            source_type=message.source_type,
            source_venue_code=message.source_venue_code,
            message_in_id=message.id,
            broker_code=broker_code,
            currency_pair=header.currency_pair,
            mic=header.mic,
            isin=leg.isin,
            trade_date=header.trade_date,
            execution_time_utc=header.execution_time_utc,
            buy_sell=leg.buy_sell(header.side),
            notional=notional * NOTIONAL_MULTIPLIER if notional is not None else Decimal("0"),
            notional_currency=leg.notional_currency or "",
            settlement_currency=leg.notional_currency,
            settlement_date=settlement_date,
            portfolio_mx3=portfolio_mx3,
        )
        trade.tvtic, trade.uti = self._identifiers(header, leg)

        events: list[TradeWorkflowEvent] = []

        if product_type is ProductType.FWD:
            trade.hedge_type = FORWARD_HEDGE_TYPE
            trade.hedge_rate = parse_decimal(leg.hedge_rate)
            trade.spot_rate = header.spot_rate
            trade.swap_points = header.forward_points
        else:
            trade.call_put = map_call_put_to_base(leg.call_put, header.currency_pair, leg.strike_currency)
            trade.strike = parse_decimal(leg.strike)
            trade.expiry_date = parse_fix_date(leg.expiry) or header.trade_date
            trade.cut = cut or ""
            trade.premium = parse_decimal(leg.premium)
            trade.premium_currency = leg.notional_currency
            trade.premium_date = settlement_date

            if cut is None:
                events.append(
                    TradeWorkflowEvent(
                        event_type="WARNING",
                        description=(
                            f"No cut mapping found for currency pair {header.currency_pair}. "
                            f"Venue cut '{leg.venue_cut or ''}' ignored."
                        ),
                        field_name="Cut",
                        old_value=leg.venue_cut or "",
                        new_value="",
                        initiator_id=self._initiator_id,
                    )
                )

        return TradeBundle(trade=trade, workflow_events=events)

    @staticmethod
    def _identifiers(header: _AeHeader, leg: _AeLeg) -> tuple[str | None, str | None]:
        """TVTIC and UTI for one leg.

        UTI is the LEI prefix from 1903 plus the leg TVTIC; without both, the
        venue's own leg UTI (2893) is used.
        """
        if leg.tvtic and leg.tvtic.strip():
            if header.uti_prefix:
                return leg.tvtic, header.uti_prefix + leg.tvtic
            return leg.tvtic, leg.leg_uti
        return None, leg.leg_uti
