"""Load listing rows from plain, gzip-compressed, or zipped CSV files."""

from __future__ import annotations

import csv
import gzip
import io
import logging
import zipfile
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".gz", ".zip")


class DatasetError(ValueError):
    """Base error for datasets that cannot be turned into listing rows."""


class UnsupportedDatasetError(DatasetError):
    """Raised when the file extension is not one of SUPPORTED_SUFFIXES."""


class DatasetFormatError(DatasetError):
    """Raised when a supported container holds no readable CSV payload."""


def _read_rows(handle: Iterable[str]) -> list[dict[str, str]]:
    # Short rows are padded with "", cells past the header are dropped.
    reader = csv.DictReader(handle, restval="")
    return [
        {key: value for key, value in row.items() if key is not None}
        for row in reader
    ]


def _read_zip(path: Path) -> list[dict[str, str]]:
    with zipfile.ZipFile(path) as archive:
        members = [
            name
            for name in archive.namelist()
            if name.lower().endswith(".csv") and not name.endswith("/")
        ]
        if not members:
            raise DatasetFormatError(f"No .csv file found inside archive: {path}")
        if len(members) > 1:
            logger.warning("Archive %s holds %d CSV files, reading %s", path, len(members), members[0])
        with archive.open(members[0]) as raw:
            with io.TextIOWrapper(raw, encoding="utf-8-sig", newline="") as handle:
                return _read_rows(handle)


def load_listings(path: str | Path) -> list[dict[str, str]]:
    """Read every listing row from `path` into memory.

    The format is chosen by suffix: `.csv` is read as-is, `.gz` is
    gunzipped first (e.g. `listings.csv.gz`), and `.zip` reads the first
    CSV member of the archive.
    """

    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedDatasetError(
            f"Unsupported dataset file type {suffix or '(none)'!r} for {file_path}; "
            f"expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    if not file_path.exists():
        raise FileNotFoundError(f"Dataset file not found: {file_path}")

    if suffix == ".csv":
        with file_path.open("r", encoding="utf-8-sig", newline="") as handle:
            rows = _read_rows(handle)
    elif suffix == ".gz":
        with gzip.open(file_path, "rt", encoding="utf-8-sig", newline="") as handle:
            rows = _read_rows(handle)
    else:
        rows = _read_zip(file_path)

    logger.info("Loaded %d listings from %s", len(rows), file_path)
    return rows
