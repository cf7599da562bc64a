"""Export the catalog to columnar formats for analysis tooling."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from ..utils.logging import get_logger
from .schema import CatalogEntry

LOGGER = get_logger(__name__)

COLUMNS = ["category", "label", "description", "inputsSummary", "outputsSummary", "path"]


def export_parquet(entries: Sequence[CatalogEntry], path: Path) -> Path:
    """Write ``entries`` to ``path`` as a Parquet table, keeping their order."""

    df = pd.DataFrame([entry.as_record() for entry in entries], columns=COLUMNS)
    path.parent.mkdir(parents=True, exist_ok=True)
    LOGGER.info("Saving %d catalog rows to %s", len(df), path)
    df.to_parquet(path, index=False, engine="pyarrow")
    return path
