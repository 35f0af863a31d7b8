from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Mapping, Union

SHORTHAND_PATTERN = re.compile(r"^(\d+)d$")


@dataclass(frozen=True)
class RelativeShorthand:
    days: int

    def __str__(self) -> str:
        return f"{self.days}d"


@dataclass(frozen=True)
class ExplicitRange:
    start_date: str
    end_date: str

    def as_wire(self) -> dict[str, str]:
        return {"startDate": self.start_date, "endDate": self.end_date}


DateRange = Union[RelativeShorthand, ExplicitRange]
DateRangeInput = Union[str, Mapping[str, str], RelativeShorthand, ExplicitRange]


def coerce_date_range(value: Any) -> DateRange | None:
    """Classify a caller-supplied range. ``None`` means "not recognised"."""
    if isinstance(value, (RelativeShorthand, ExplicitRange)):
        return value
    if isinstance(value, str):
        match = SHORTHAND_PATTERN.match(value)
        if match:
            return RelativeShorthand(days=int(match.group(1)))
        return None
    if isinstance(value, Mapping) and "startDate" in value and "endDate" in value:
        return ExplicitRange(start_date=str(value["startDate"]), end_date=str(value["endDate"]))
    return None


def parse_date_range(value: DateRangeInput) -> Any:
    """GA4 wire form. Mappings and unrecognised values are returned untouched."""
    parsed = coerce_date_range(value)
    if isinstance(parsed, RelativeShorthand):
        return {"startDate": f"{parsed.days}daysAgo", "endDate": "today"}
    if isinstance(value, ExplicitRange):
        return value.as_wire()
    return value


def parse_search_console_date_range(value: DateRangeInput, today: date | None = None) -> Any:
    """Search Console wire form with absolute dates."""
    parsed = coerce_date_range(value)
    if isinstance(parsed, RelativeShorthand):
        end = today or date.today()
        start = end - timedelta(days=parsed.days)
        return {"startDate": start.isoformat(), "endDate": end.isoformat()}
    if isinstance(value, ExplicitRange):
        return value.as_wire()
    return value


def date_range_label(value: Any) -> str:
    parsed = coerce_date_range(value)
    if isinstance(parsed, RelativeShorthand):
        return str(parsed)
    return "custom"
