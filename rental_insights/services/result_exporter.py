"""Bundle pipeline results and write them as indented JSON."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from rental_insights.schemas import ExportBundle, HostRankingEntry, ListingStatistics

logger = logging.getLogger(__name__)


def _default_file_mode() -> int:
    """Mode a plain `open(path, "w")` would create, honouring the process umask."""

    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def build_export(
    subset: Sequence[Mapping[str, Any]],
    statistics: ListingStatistics | None,
    ranking: Sequence[HostRankingEntry],
) -> ExportBundle:
    """Combine filtered listings, statistics and ranking without further computation."""

    return ExportBundle(
        filtered_listings=[dict(record) for record in subset],
        statistics=statistics,
        host_ranking=list(ranking),
    )


def dump_export(bundle: ExportBundle) -> str:
    """Serialize a bundle to JSON text with 2-space indentation and original key names."""

    return json.dumps(bundle.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def write_export(bundle: ExportBundle, path: str | Path) -> Path:
    """Write the bundle to `path`, replacing any existing file only on success."""

    destination = Path(path)
    payload = dump_export(bundle)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        # mkstemp creates 0600 files.
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, destination)
    except Exception:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info(
        "Exported %d listings and %d hosts to %s",
        len(bundle.filtered_listings),
        len(bundle.host_ranking),
        destination,
    )
    return destination


def read_export(path: str | Path) -> ExportBundle:
    """Load a bundle previously written by `write_export`."""

    with Path(path).open("r", encoding="utf-8") as handle:
        return ExportBundle.model_validate(json.load(handle))
