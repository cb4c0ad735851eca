"""Aggregate statistics over a filtered listing subset."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from rental_insights.schemas import ListingStatistics
from rental_insights.services.coercion import derive_metrics

_TWO_PLACES = Decimal("0.01")
_EXPONENT_THRESHOLD = 1e21


def _divide(numerator: float, denominator: float) -> float:
    """IEEE division: x/0 is a signed infinity and 0/0 is NaN instead of raising."""

    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def format_fixed(value: float) -> str:
    """Format with two fractional digits, rounding half away from zero.

    Non-finite values render as `NaN`, `Infinity` and `-Infinity`. Magnitudes
    of 1e21 and above switch to exponent notation (`1e+27`).
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0.00"
    if abs(value) >= _EXPONENT_THRESHOLD:
        return repr(value)
    return str(Decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def average_price_per_room(subset: Sequence[Mapping[str, Any]]) -> float:
    """Mean of per-listing price/rooms; NaN for an empty subset."""

    total = 0.0
    for record in subset:
        metrics = derive_metrics(record)
        total += _divide(metrics.price, metrics.rooms)
    return _divide(total, len(subset))


def compute_statistics(subset: Sequence[Mapping[str, Any]]) -> ListingStatistics:
    return ListingStatistics(
        total_listings=len(subset),
        average_price_per_room=format_fixed(average_price_per_room(subset)),
    )
