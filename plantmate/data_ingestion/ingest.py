from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from ..recommendations.catalog import normalize_catalog
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "slug",
    "common_name",
    "scientific_name",
    "min_sun_hours",
    "max_sun_hours",
    "indoor_ok",
    "difficulty",
    "pot_size_min_liters",
    "watering_need",
    "fertilization_freq_days",
    "soil_type",
    "tags",
]


def _read_category(path: Path) -> list[dict[str, Any]]:
    if not path.is_file():
        logger.warning("Catalog file %s not found, skipping", path)
        return []
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        logger.warning("Catalog file %s is not a list, skipping", path)
        return []
    return data


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the catalog ingestion pipeline.

    Steps:
    - Read every category file from the raw data directory.
    - Map raw fields into the canonical plant schema.
    - Drop duplicate slugs, keeping the first category that defines them.
    - Persist the merged catalog as CSV for the suggestion engine.
    """

    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    raw: list[dict[str, Any]] = []
    for category in config.categories:
        raw.extend(_read_category(config.raw_data_dir / f"{category}.json"))

    records = normalize_catalog(raw)
    if len(records) < len(raw):
        logger.info("Dropped %d raw entries without an identifier", len(raw) - len(records))

    canonical = pd.DataFrame(
        [r.model_dump() for r in records],
        columns=CANONICAL_COLUMNS,
    )
    canonical["tags"] = canonical["tags"].apply(lambda tags: "|".join(tags))
    canonical = canonical.drop_duplicates(subset="slug", keep="first")

    # Write processed CSV
    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed catalog saved to: {path}")
