"""Date validator.

Without conversion only :class:`~datetime.datetime` values are accepted.  With
conversion strings and numbers are parsed: ISO 8601 strings, a handful of
common ``month-day-year`` layouts, and timestamps (milliseconds by default,
seconds once ``timestamp("unix")`` is set).  Naive datetimes are read as UTC.
"""

from __future__ import annotations

import re
from datetime import date as _date
from datetime import datetime, timezone
from typing import Any

from .base import Schema, State
from .errors import SchemaDefinitionError

_ISO = re.compile(
    r"^(?:[-+]\d{2})?(?:\d{4}(?!\d{2}\b))"
    r"(?:(-?)(?:(?:0[1-9]|1[0-2])(?:\1(?:[12]\d|0[1-9]|3[01]))?"
    r"|W(?:[0-4]\d|5[0-2])(?:-?[1-7])?"
    r"|(?:00[1-9]|0[1-9]\d|[12]\d{2}|3(?:[0-5]\d|6[1-6])))"
    r"(?![T]$|[T][\d]+Z$)(?:[T\s](?:(?:(?:[01]\d|2[0-3])(?:(:?)[0-5]\d)?|24\:?00)"
    r"(?:[.,]\d+(?!:))?)(?:\2[0-5]\d(?:[.,]\d+)?)?(?:[Z]|(?:[+-])(?:[01]\d|2[0-3])"
    r"(?::?[0-5]\d)?)?)?)?$"
)
_NUMERIC = re.compile(r"^\s*[+-]?\d+(\.\d+)?\s*$")
_FORMATS = (
    "%m-%d-%Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d %B %Y %H:%M %Z",
    "%d %B %Y %H:%M",
    "%d %B %Y",
    "%B %d, %Y",
)
_TIMESTAMP_TYPES = ("javascript", "unix")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _from_timestamp(value: float, timestamp: str) -> datetime | None:
    seconds = value if timestamp == "unix" else value / 1000
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _from_iso(value: str) -> datetime | None:
    try:
        return _as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
    except ValueError:
        return None


def parse_date(value: Any, fmt: str | None = None) -> datetime | None:
    """
    Parse *value* into an aware UTC datetime.

    Args:
        value: A datetime, date, ISO/common-layout string or timestamp.
        fmt: ``"iso"``, ``"javascript"`` or ``"unix"`` to restrict the
            accepted representations, ``None`` for any.

    Returns:
        The parsed datetime, or ``None`` if *value* is not a valid date.
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, _date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        if fmt == "iso":
            return None
        return _from_timestamp(value, fmt or "javascript")
    if not isinstance(value, str):
        return None

    if fmt == "iso":
        return _from_iso(value) if _ISO.match(value) else None
    if fmt in _TIMESTAMP_TYPES:
        if not _NUMERIC.match(value):
            return None
        return _from_timestamp(float(value), fmt)
    if _NUMERIC.match(value):
        return _from_timestamp(float(value), "javascript")

    parsed = _from_iso(value)
    if parsed is not None:
        return parsed
    for layout in _FORMATS:
        try:
            return _as_utc(datetime.strptime(value.strip(), layout))
        except ValueError:
            continue
    return None


class DateSchema(Schema):
    """Validates dates; see the module docstring for accepted inputs."""

    kind = "date"
    operations = Schema.operations | frozenset(
        {"greater", "iso", "less", "max", "min", "timestamp"}
    )

    def __init__(self) -> None:
        super().__init__()
        self._format: str | None = None

    def _coerce(self, value: Any, state: State) -> Any:
        if isinstance(value, datetime):
            return _as_utc(value)
        if not state.prefs.convert:
            state.fail("date.base", value)
        parsed = parse_date(value, self._format)
        if parsed is not None:
            return parsed
        if self._format is not None:
            state.fail(
                "date.format",
                value,
                message_key=f"date.format.{self._format}",
                format=self._format,
            )
        state.fail("date.base", value)

    # -- formats --------------------------------------------------------------

    def iso(self) -> DateSchema:
        """Only accept ISO 8601 strings when converting."""
        other = self.clone()
        other._format = "iso"
        return other

    def timestamp(self, type_: str = "javascript") -> DateSchema:
        """Only accept timestamps (``javascript`` ms or ``unix`` seconds)."""
        if type_ not in _TIMESTAMP_TYPES:
            raise SchemaDefinitionError(
                f'timestamp type must be one of "javascript" or "unix", got {type_!r}'
            )
        other = self.clone()
        other._format = type_
        return other

    # -- comparisons ----------------------------------------------------------

    def _compare(self, name: str, limit: Any, compare: Any) -> DateSchema:
        parsed = limit if limit == "now" else parse_date(limit)
        if parsed is None:
            raise SchemaDefinitionError(
                f"{name} date must have a valid date format, got {limit!r}"
            )

        def check(value: datetime, state: State) -> datetime:
            bound = datetime.now(timezone.utc) if parsed == "now" else parsed
            if not compare(value, bound):
                state.fail(f"date.{name}", value, limit=bound)
            return value

        return self._with_rule(name, check, limit=limit)

    def greater(self, limit: Any) -> DateSchema:
        return self._compare("greater", limit, lambda v, n: v > n)

    def less(self, limit: Any) -> DateSchema:
        return self._compare("less", limit, lambda v, n: v < n)

    def max(self, limit: Any) -> DateSchema:
        return self._compare("max", limit, lambda v, n: v <= n)

    def min(self, limit: Any) -> DateSchema:
        return self._compare("min", limit, lambda v, n: v >= n)


def date() -> DateSchema:
    return DateSchema()
