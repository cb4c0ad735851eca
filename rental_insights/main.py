"""FastAPI entrypoint exposing listing analysis and export runs."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI

from rental_insights.config import load_settings
from rental_insights.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    ExportRequest,
    ExportResponse,
    FilterCriteria,
    StepLog,
)
from rental_insights.services.dataset_loader import load_listings
from rental_insights.services.listing_pipeline import AnalysisResult, run_analysis
from rental_insights.services.result_exporter import write_export


load_dotenv()
settings = load_settings()
app = FastAPI(title="Rental Listings Insights", version="0.1.0")
logger = logging.getLogger(__name__)


def _resolve_dataset_path(dataset_path: str | None) -> str:
    path = (dataset_path or "").strip() or settings.listings_data_path
    if not path:
        raise ValueError("No dataset_path given and LISTINGS_DATA_PATH is not set.")
    return path


def _load_records(dataset_path: str | None) -> tuple[str, list[dict[str, str]]]:
    path = _resolve_dataset_path(dataset_path)
    return path, load_listings(path)


def _analysis_steps(
    *,
    dataset_path: str,
    records: Sequence[Mapping[str, Any]],
    criteria: FilterCriteria,
    result: AnalysisResult,
) -> list[StepLog]:
    """Summarize each pipeline stage for the response trace."""

    return [
        StepLog(
            module="dataset_loader",
            prompt={"dataset_path": dataset_path},
            response={"records_loaded": len(records)},
        ),
        StepLog(
            module="listing_filter",
            prompt={
                "criteria": criteria.model_dump(by_alias=True, exclude_none=True),
                "strict_zero_bounds": settings.strict_zero_bounds,
            },
            response={"filtered_count": len(result.filtered_listings)},
        ),
        StepLog(
            module="listing_statistics",
            prompt={"listing_count": len(result.filtered_listings)},
            response=result.statistics.model_dump(by_alias=True),
        ),
        StepLog(
            module="host_ranking",
            prompt={"listing_count": len(result.filtered_listings)},
            response={"host_count": len(result.host_ranking)},
        ),
    ]


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/analysis", response_model=AnalysisResponse)
def analysis(payload: AnalysisRequest) -> AnalysisResponse:
    """Load a dataset, apply the criteria, and return listings, statistics and ranking."""

    try:
        dataset_path, records = _load_records(payload.dataset_path)
        result = run_analysis(records, payload.criteria, strict_bounds=settings.strict_zero_bounds)
    except Exception as exc:
        logger.warning("analysis run failed: %s: %s", type(exc).__name__, exc)
        return AnalysisResponse(
            status="error",
            error=f"{type(exc).__name__}: {exc}",
            records_loaded=0,
            result=None,
            steps=[],
        )
    return AnalysisResponse(
        status="ok",
        error=None,
        records_loaded=result.records_loaded,
        result=result.to_export(),
        steps=_analysis_steps(
            dataset_path=dataset_path,
            records=records,
            criteria=payload.criteria,
            result=result,
        ),
    )


@app.post("/api/export", response_model=ExportResponse)
def export(payload: ExportRequest) -> ExportResponse:
    """Run the analysis and write the bundle as JSON to `output_path`."""

    output_path = (payload.output_path or "").strip() or settings.export_path
    try:
        dataset_path, records = _load_records(payload.dataset_path)
        result = run_analysis(records, payload.criteria, strict_bounds=settings.strict_zero_bounds)
        written = write_export(result.to_export(), output_path)
    except Exception as exc:
        logger.warning("export run failed: %s: %s", type(exc).__name__, exc)
        return ExportResponse(
            status="error",
            error=f"{type(exc).__name__}: {exc}",
            output_path=None,
            total_listings=0,
            steps=[],
        )
    steps = _analysis_steps(
        dataset_path=dataset_path,
        records=records,
        criteria=payload.criteria,
        result=result,
    )
    steps.append(
        StepLog(
            module="result_exporter",
            prompt={"output_path": output_path},
            response={"written_path": str(written)},
        )
    )
    return ExportResponse(
        status="ok",
        error=None,
        output_path=str(written),
        total_listings=result.statistics.total_listings,
        steps=steps,
    )
