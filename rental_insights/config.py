"""Centralized runtime settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Settings shared by the command line and the HTTP API."""

    listings_data_path: str | None
    export_path: str
    strict_zero_bounds: bool
    log_level: str


def load_settings() -> Settings:
    """Load settings from environment with safe defaults for local development."""

    def parse_bool(value: str | None, default: bool) -> bool:
        if value is None:
            return default
        lowered = value.strip().lower()
        return lowered in {"1", "true", "yes", "on"}

    def parse_optional(value: str | None) -> str | None:
        if value is None or value.strip() == "":
            return None
        return value.strip()

    return Settings(
        listings_data_path=parse_optional(os.getenv("LISTINGS_DATA_PATH")),
        export_path=os.getenv("LISTINGS_EXPORT_PATH", "results.json"),
        strict_zero_bounds=parse_bool(os.getenv("LISTINGS_STRICT_ZERO_BOUNDS"), False),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
