"""Range filter over derived listing price, room count, and review score."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from rental_insights.schemas import FilterCriteria
from rental_insights.services.coercion import ListingMetrics, derive_metrics


def _bound_applies(bound: float | None, *, strict_bounds: bool) -> bool:
    # A zero bound counts as "not provided" unless strict presence is requested.
    # NaN never constrains in either mode.
    if bound is None or math.isnan(bound):
        return False
    return strict_bounds or bool(bound)


def matches_criteria(
    metrics: ListingMetrics,
    criteria: FilterCriteria,
    *,
    strict_bounds: bool = False,
) -> bool:
    """Return True when the derived values satisfy every applicable bound."""

    checks = (
        (criteria.min_price, metrics.price, True),
        (criteria.max_price, metrics.price, False),
        (criteria.min_rooms, metrics.rooms, True),
        (criteria.max_rooms, metrics.rooms, False),
        (criteria.min_review_score, metrics.review_score, True),
        (criteria.max_review_score, metrics.review_score, False),
    )
    for bound, value, is_lower in checks:
        if not _bound_applies(bound, strict_bounds=strict_bounds):
            continue
        if is_lower and not value >= bound:
            return False
        if not is_lower and not value <= bound:
            return False
    return True


def filter_listings(
    records: Iterable[Mapping[str, Any]],
    criteria: FilterCriteria,
    *,
    strict_bounds: bool = False,
) -> list[Mapping[str, Any]]:
    """Keep the records that pass `criteria`, preserving input order."""

    return [
        record
        for record in records
        if matches_criteria(derive_metrics(record), criteria, strict_bounds=strict_bounds)
    ]
