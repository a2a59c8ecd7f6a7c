"""
Time frame resolution from provider-specific timestamp fields.

Supported input shapes:
  - a single epoch field (seconds, milliseconds or nanoseconds)
  - paired start/end fields, epoch or ISO-8601 with offset, forming an interval
  - a single ISO-8601 string with offset

Epoch values are read against an offset field on the record (or the document)
when the provider supplies one, otherwise against the provider-declared default.
A resolved time frame always carries an explicit offset.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone
from enum import Enum
from typing import Any

from dateutil import parser as date_parser

from .coercion import optional_node
from .exceptions import InvalidTimestampError
from .schema import TimeFrame


class EpochUnit(int, Enum):
    """Number of epoch ticks per second."""

    SECONDS = 1
    MILLISECONDS = 1_000
    NANOSECONDS = 1_000_000_000


_OFFSET_PATTERN = re.compile(r"^(?P<sign>[+-])?(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$")


@dataclass(frozen=True)
class TimestampScheme:
    """Declares where a category keeps its timestamps and how to read them."""

    instant_field: str | None = None
    start_field: str | None = None
    end_field: str | None = None
    epoch_unit: EpochUnit = EpochUnit.MILLISECONDS
    offset_field: str | None = None
    default_offset: timezone | None = None
    # Epoch encodes local wall-clock time as though it were UTC
    epoch_is_local: bool = False
    collapse_equal_interval: bool = False


def parse_utc_offset(value: Any) -> timezone:
    """
    Parse a UTC offset.

    Accepts "Z", "-06:00", "-6:00", "-0600", "+5" and numeric hours (-6, 5.5).

    Raises:
        InvalidTimestampError: If the value is not a recognizable offset
    """
    if isinstance(value, bool):
        raise InvalidTimestampError(f"Invalid UTC offset: {value!r}")
    if isinstance(value, (int, float)):
        try:
            delta = timedelta(hours=value)
        except (OverflowError, ValueError) as e:
            raise InvalidTimestampError(f"Invalid UTC offset: {value!r}") from e
    elif isinstance(value, str):
        text = value.strip()
        if text.upper() in ("Z", "UTC"):
            return UTC
        match = _OFFSET_PATTERN.match(text)
        if not match:
            raise InvalidTimestampError(f"Invalid UTC offset: {value!r}")
        delta = timedelta(hours=int(match["hours"]), minutes=int(match["minutes"] or 0))
        if match["sign"] == "-":
            delta = -delta
    else:
        raise InvalidTimestampError(f"Invalid UTC offset: {value!r}")

    if abs(delta) >= timedelta(hours=24):
        raise InvalidTimestampError(f"UTC offset out of range: {value!r}")
    return timezone(delta)


def _is_epoch(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and value.strip().lstrip("-").isdigit()


def _resolve_offset(
    record: Any,
    scheme: TimestampScheme,
    document: Any | None,
) -> timezone | None:
    if scheme.offset_field:
        raw = optional_node(record, scheme.offset_field)
        if raw is None and document is not None:
            raw = optional_node(document, scheme.offset_field)
        if raw is not None:
            return parse_utc_offset(raw)
    return scheme.default_offset


def _from_epoch(value: Any, scheme: TimestampScheme, offset: timezone | None, field: str) -> datetime:
    if offset is None:
        raise InvalidTimestampError(
            f"No UTC offset available for epoch field '{field}'",
            path=field,
        )
    try:
        ticks = int(value) if isinstance(value, str) else value
        seconds, remainder = divmod(ticks, scheme.epoch_unit.value)
        utc = datetime.fromtimestamp(seconds, tz=UTC) + timedelta(
            microseconds=remainder * 1_000_000 / scheme.epoch_unit.value
        )
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidTimestampError(f"Epoch value out of range: {value!r}", path=field) from e

    if scheme.epoch_is_local:
        return utc.replace(tzinfo=offset)
    return utc.astimezone(offset)


def _from_iso(value: str, offset: timezone | None, field: str) -> datetime:
    try:
        parsed = date_parser.isoparse(value)
    except ValueError as e:
        raise InvalidTimestampError(f"Invalid ISO-8601 timestamp: {value!r}", path=field) from e

    if parsed.tzinfo is None:
        if offset is None:
            raise InvalidTimestampError(
                f"Timestamp {value!r} has no UTC offset",
                path=field,
            )
        parsed = parsed.replace(tzinfo=offset)
    return parsed


def _to_datetime(value: Any, scheme: TimestampScheme, offset: timezone | None, field: str) -> datetime:
    if _is_epoch(value):
        return _from_epoch(value, scheme, offset, field)
    if isinstance(value, str):
        return _from_iso(value, offset, field)
    raise InvalidTimestampError(f"Unsupported timestamp value: {value!r}", path=field)


def resolve_time_frame(
    record: Any,
    scheme: TimestampScheme,
    document: Any | None = None,
) -> TimeFrame | None:
    """
    Resolve the effective time frame of a raw record.

    Args:
        record: Raw record
        scheme: Timestamp field declaration of the category
        document: Enclosing response document, searched for a response-level offset

    Returns:
        TimeFrame, or None if none of the declared timestamp fields is present

    Raises:
        InvalidTimestampError: If present timestamp fields cannot be resolved
    """
    if scheme.start_field and scheme.end_field:
        start_raw = optional_node(record, scheme.start_field)
        end_raw = optional_node(record, scheme.end_field)
        if start_raw is not None or end_raw is not None:
            if start_raw is None or end_raw is None:
                raise InvalidTimestampError(
                    f"Interval requires both '{scheme.start_field}' and '{scheme.end_field}'",
                    path=scheme.start_field if start_raw is None else scheme.end_field,
                )
            offset = _resolve_offset(record, scheme, document)
            start = _to_datetime(start_raw, scheme, offset, scheme.start_field)
            end = _to_datetime(end_raw, scheme, offset, scheme.end_field)
            if end < start:
                raise InvalidTimestampError(
                    f"Interval ends before it starts: {start.isoformat()} > {end.isoformat()}",
                    path=scheme.end_field,
                )
            if scheme.collapse_equal_interval and start == end:
                return TimeFrame.of_instant(start)
            return TimeFrame.of_interval(start, end)

    if scheme.instant_field:
        raw = optional_node(record, scheme.instant_field)
        if raw is not None:
            offset = _resolve_offset(record, scheme, document)
            return TimeFrame.of_instant(_to_datetime(raw, scheme, offset, scheme.instant_field))

    return None
