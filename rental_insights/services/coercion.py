"""Lenient numeric coercion for free-form listing text fields."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_PRICE_NOISE = re.compile(r"[^0-9.\-]+")
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_LEADING_INFINITY = re.compile(r"[+-]?Infinity")
_LEADING_INT = re.compile(r"[+-]?\d+", re.ASCII)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def leading_float(text: str | None) -> float:
    """Parse the longest float literal at the start of `text`, NaN when none.

    Leading whitespace is skipped and trailing garbage ignored, so
    `"12.5 per night"` gives 12.5 and `"1-2"` gives 1.0.
    """

    stripped = _as_text(text).lstrip()
    match = _LEADING_FLOAT.match(stripped)
    if match:
        return float(match.group(0))
    match = _LEADING_INFINITY.match(stripped)
    if match:
        return -math.inf if match.group(0).startswith("-") else math.inf
    return math.nan


def parse_price(text: str | None) -> float:
    """Convert a currency string such as `"$1,234.50"` to a float.

    Every character other than digits, `.` and `-` is dropped before parsing.
    Unparseable input and zero both come back as 0.0.
    """

    value = leading_float(_PRICE_NOISE.sub("", _as_text(text)))
    if math.isnan(value) or value == 0:
        return 0.0
    return value


def parse_number(text: str | None, default_value: Any = 0) -> Any:
    """Parse a base-10 integer prefix (`"4 bedrooms"` -> 4), else `default_value`."""

    match = _LEADING_INT.match(_as_text(text).lstrip())
    if not match:
        return default_value
    return int(match.group(0))


@dataclass(frozen=True)
class ListingMetrics:
    """Numeric fields derived from one raw listing record."""

    price: float
    rooms: int
    review_score: int


def derive_metrics(record: Mapping[str, Any]) -> ListingMetrics:
    # Rooms default to 1 so price-per-room never divides by a missing value.
    return ListingMetrics(
        price=parse_price(record.get("price")),
        rooms=parse_number(record.get("bedrooms"), 1),
        review_score=parse_number(record.get("review_scores_rating")),
    )
