"""Lenient FIX tag=value tokenizer and field converters.

Raw payloads arrive from drop copies and mail gateways, so the field
separator is not guaranteed: SOH is preferred, then ``|``, then a space.
Fields that are not ``<int>=<non-empty value>`` are skipped.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Iterable, NamedTuple

SOH = "\x01"

FIX_DATE_FORMAT = "%Y%m%d"
FIX_TIMESTAMP_FORMATS = ("%Y%m%d-%H:%M:%S.%f", "%Y%m%d-%H:%M:%S")

LEG_START_TAG = 600


class FixTag(NamedTuple):
    tag: int
    value: str


def _separator(payload: str) -> str:
    if SOH in payload:
        return SOH
    if "|" in payload:
        return "|"
    return " "


def parse_fix_tags(payload: str | None) -> list[FixTag]:
    """Split a raw FIX payload into ordered (tag, value) pairs.

    Example:
        >>> parse_fix_tags("8=FIX.4.4|35=AE|55=EUR/SEK")
        [FixTag(tag=8, value='FIX.4.4'), FixTag(tag=35, value='AE'), FixTag(tag=55, value='EUR/SEK')]
    """
    if not payload:
        return []

    tags: list[FixTag] = []
    for field in payload.split(_separator(payload)):
        tag_part, eq, value_part = field.partition("=")
        tag_part = tag_part.strip()
        value_part = value_part.strip()
        if not eq or not tag_part or not value_part:
            continue
        try:
            tag = int(tag_part)
        except ValueError:
            continue
        tags.append(FixTag(tag, value_part))

    return tags


def get_tag_value(tags: Iterable[FixTag], tag: int) -> str | None:
    """First value for a tag, or None."""
    for fix_tag in tags:
        if fix_tag.tag == tag:
            return fix_tag.value
    return None


def first_tag_value(tags: list[FixTag], *candidates: int) -> str | None:
    """Value of the first candidate tag that is present."""
    for tag in candidates:
        value = get_tag_value(tags, tag)
        if value is not None:
            return value
    return None


def split_leg_groups(tags: Iterable[FixTag]) -> list[list[FixTag]]:
    """Group tags into legs: each leg starts at tag 600 and runs to the next one.

    Tags before the first 600 belong to the header and are not returned.
    """
    groups: list[list[FixTag]] = []
    current: list[FixTag] | None = None

    for fix_tag in tags:
        if fix_tag.tag == LEG_START_TAG:
            current = []
            groups.append(current)
        if current is not None:
            current.append(fix_tag)

    return groups


def parse_fix_date(raw: str | None) -> date | None:
    if not raw or not raw.strip():
        return None
    try:
        return datetime.strptime(raw.strip(), FIX_DATE_FORMAT).date()
    except ValueError:
        return None


def parse_fix_timestamp(raw: str | None) -> datetime | None:
    """Parse a UTCTimestamp (``YYYYMMDD-HH:MM:SS[.fff]``) as an aware UTC datetime."""
    if not raw or not raw.strip():
        return None
    for fmt in FIX_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw.strip(), fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def parse_decimal(raw: str | None) -> Decimal | None:
    if not raw or not raw.strip():
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None
