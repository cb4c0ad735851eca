"""Filter, aggregate and rank a listing dataset in one pass or step by step."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rental_insights.schemas import ExportBundle, FilterCriteria, HostRankingEntry, ListingStatistics
from rental_insights.services.dataset_loader import load_listings
from rental_insights.services.host_ranking import compute_host_ranking
from rental_insights.services.listing_filter import filter_listings
from rental_insights.services.listing_statistics import compute_statistics
from rental_insights.services.result_exporter import build_export, write_export


@dataclass(frozen=True)
class AnalysisResult:
    """Everything derived from one filter run over a loaded dataset."""

    records_loaded: int
    filtered_listings: list[Mapping[str, Any]]
    statistics: ListingStatistics
    host_ranking: list[HostRankingEntry]

    def to_export(self) -> ExportBundle:
        return build_export(self.filtered_listings, self.statistics, self.host_ranking)


def run_analysis(
    records: Sequence[Mapping[str, Any]],
    criteria: FilterCriteria,
    *,
    strict_bounds: bool = False,
) -> AnalysisResult:
    """Run filter -> statistics -> ranking and return the results as one value."""

    subset = filter_listings(records, criteria, strict_bounds=strict_bounds)
    return AnalysisResult(
        records_loaded=len(records),
        filtered_listings=subset,
        statistics=compute_statistics(subset),
        host_ranking=compute_host_ranking(subset),
    )


class ListingDataHandler:
    """Step-by-step wrapper around the pipeline that keeps the latest results.

    `data` is fixed at construction. `filtered_data` starts empty and is
    replaced by each `filter_listings` call. `statistics` (None until computed)
    and `host_ranking` always reflect the `filtered_data` current at the time
    they were computed; re-filtering does not recompute them.
    """

    def __init__(self, records: Sequence[Mapping[str, Any]], *, strict_bounds: bool = False) -> None:
        self.data: list[Mapping[str, Any]] = list(records)
        self.strict_bounds = strict_bounds
        self.filtered_data: list[Mapping[str, Any]] = []
        self.statistics: ListingStatistics | None = None
        self.host_ranking: list[HostRankingEntry] = []

    @classmethod
    def from_path(cls, path: str | Path, *, strict_bounds: bool = False) -> ListingDataHandler:
        return cls(load_listings(path), strict_bounds=strict_bounds)

    def filter_listings(self, criteria: FilterCriteria) -> ListingDataHandler:
        self.filtered_data = filter_listings(self.data, criteria, strict_bounds=self.strict_bounds)
        return self

    def compute_statistics(self) -> ListingDataHandler:
        self.statistics = compute_statistics(self.filtered_data)
        return self

    def compute_host_ranking(self) -> ListingDataHandler:
        self.host_ranking = compute_host_ranking(self.filtered_data)
        return self

    def build_export(self) -> ExportBundle:
        return build_export(self.filtered_data, self.statistics, self.host_ranking)

    def export_results(self, path: str | Path) -> ListingDataHandler:
        write_export(self.build_export(), path)
        return self

    def get_data(self) -> list[Mapping[str, Any]]:
        return self.data

    def get_filtered_data(self) -> list[Mapping[str, Any]]:
        return self.filtered_data

    def get_statistics(self) -> ListingStatistics | None:
        return self.statistics

    def get_host_ranking(self) -> list[HostRankingEntry]:
        return self.host_ranking
