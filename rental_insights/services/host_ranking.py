"""Rank hosts by how many listings they own in a filtered subset."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from rental_insights.schemas import HostRankingEntry


def compute_host_ranking(subset: Iterable[Mapping[str, Any]]) -> list[HostRankingEntry]:
    """Group listings by `host_id` and order hosts by descending listing count.

    The host name is taken from the first listing seen for each host. Hosts
    with equal counts keep the order in which they first appeared.
    """

    names: dict[Any, Any] = {}
    counts: dict[Any, int] = {}
    for record in subset:
        host_id = record.get("host_id")
        if host_id not in counts:
            names[host_id] = record.get("host_name")
            counts[host_id] = 0
        counts[host_id] += 1

    # sorted() is stable, so reverse=True keeps first-seen order among ties.
    ordered = sorted(counts, key=counts.__getitem__, reverse=True)
    return [
        HostRankingEntry(host_id=host_id, host_name=names[host_id], listings_count=counts[host_id])
        for host_id in ordered
    ]
