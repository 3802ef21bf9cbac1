"""Reference data value objects read by parsers during normalization."""

from dataclasses import dataclass

from tradehub.domain.shared import ValueObject, validate_value_object


@dataclass(frozen=True)
class ExpiryCutRule(ValueObject):
    """Expiry cut to stamp on options in a currency pair (e.g. EURSEK → NY)."""

    currency_pair: str
    expiry_cut: str
    is_active: bool = True

    def __post_init__(self) -> None:
        validate_value_object(
            len(self.currency_pair) == 6,
            f"currency_pair must be 6 letters, got {self.currency_pair!r}",
        )


@dataclass(frozen=True)
class BrokerMapping(ValueObject):
    """Maps a venue's own broker code to our normalized broker code."""

    source_venue_code: str
    external_broker_code: str
    normalized_broker_code: str
    is_active: bool = True
