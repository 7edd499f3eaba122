"""Date property values: epoch-millisecond instants or JSON ranges."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any

# createdTime/updatedTime carry a time of day; day-granularity filter
# values are compared within +/- half a day.
HALF_DAY_MS = 12 * 60 * 60 * 1000


@dataclass(frozen=True)
class DateProperty:
    """A parsed date value. Empty when nothing could be parsed."""

    from_: int | float | None = None
    to: int | float | None = None
    include_time: bool | None = None
    time_zone: str | None = None

    @property
    def is_range(self) -> bool:
        return bool(self.from_) and bool(self.to)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.from_ is not None:
            d["from"] = self.from_
        if self.to is not None:
            d["to"] = self.to
        if self.include_time is not None:
            d["includeTime"] = self.include_time
        if self.time_zone is not None:
            d["timeZone"] = self.time_zone
        return d


def _number(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _instant(text: str) -> int | float | None:
    """Parse a bare numeric instant, or None if text is not a finite number."""
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_date_property(value: Any) -> DateProperty:
    """Parse a stored date value.

    A bare number is a single instant. Anything else is tried as a
    JSON object with from/to/includeTime/timeZone. Never raises:
    unparseable input gives an empty DateProperty.
    """
    if not value or not isinstance(value, str):
        return DateProperty()

    instant = _instant(value)
    if instant is not None:
        return DateProperty(from_=instant)

    try:
        data = json.loads(value)
    except ValueError:
        return DateProperty()
    if not isinstance(data, dict):
        return DateProperty()

    time_zone = data.get("timeZone")
    include_time = data.get("includeTime")
    return DateProperty(
        from_=_number(data.get("from")),
        to=_number(data.get("to")),
        include_time=include_time if isinstance(include_time, bool) else None,
        time_zone=time_zone if isinstance(time_zone, str) else None,
    )


def date_property_to_string(prop: DateProperty) -> str:
    """Serialize a date value for storage; empty when neither end is set."""
    if not (prop.from_ or prop.to):
        return ""
    return json.dumps(prop.to_dict(), separators=(",", ":"))
