"""Pydantic schemas for pipeline values and API request/response contracts."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class FilterCriteria(BaseModel):
    """Six optional range bounds over price, room count, and review score."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    min_price: float | None = Field(default=None, alias="minPrice")
    max_price: float | None = Field(default=None, alias="maxPrice")
    min_rooms: float | None = Field(default=None, alias="minRooms")
    max_rooms: float | None = Field(default=None, alias="maxRooms")
    min_review_score: float | None = Field(default=None, alias="minReviewScore")
    max_review_score: float | None = Field(default=None, alias="maxReviewScore")


class ListingStatistics(BaseModel):
    """Aggregate figures over one filtered subset."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_listings: int = Field(alias="totalListings")
    average_price_per_room: str = Field(
        alias="averagePricePerRoom",
        description="Mean of per-listing price/rooms with two fractional digits, or 'NaN'",
    )


class HostRankingEntry(BaseModel):
    """One host and the number of filtered listings it owns."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    host_id: str | None = Field(alias="hostId")
    host_name: str | None = Field(alias="hostName")
    listings_count: int = Field(alias="listingsCount")


class ExportBundle(BaseModel):
    """Filtered listings, statistics, and host ranking combined for export."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    filtered_listings: list[dict[str, Any]] = Field(alias="filteredListings")
    statistics: ListingStatistics | None
    host_ranking: list[HostRankingEntry] = Field(alias="hostRanking")


class StepLog(BaseModel):
    """One executed pipeline stage with its input summary and output summary."""

    module: str
    prompt: dict[str, Any]
    response: dict[str, Any]


class AnalysisRequest(BaseModel):
    """Input schema for `POST /api/analysis`."""

    dataset_path: str | None = Field(
        default=None,
        description="CSV, .gz or .zip dataset path; falls back to LISTINGS_DATA_PATH",
    )
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)


class AnalysisResponse(BaseModel):
    """Output schema for `POST /api/analysis`."""

    status: Literal["ok", "error"]
    error: str | None
    records_loaded: int
    result: ExportBundle | None
    steps: list[StepLog]


class ExportRequest(AnalysisRequest):
    """Input schema for `POST /api/export`."""

    output_path: str | None = Field(
        default=None,
        description="Destination JSON path; falls back to LISTINGS_EXPORT_PATH",
    )


class ExportResponse(BaseModel):
    """Output schema for `POST /api/export`."""

    status: Literal["ok", "error"]
    error: str | None
    output_path: str | None
    total_listings: int
    steps: list[StepLog]
