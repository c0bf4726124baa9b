from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .cache import invalidate
from .catalog import normalize_catalog
from .config import DEFAULT_ENGINE_CONFIG
from .models import PlantSpeciesRecord

logger = logging.getLogger(__name__)

_catalog: list[PlantSpeciesRecord] | None = None


def _load(path: Path) -> list[PlantSpeciesRecord]:
    df = pd.read_csv(path)
    # Missing cells come back as NaN; the normalizer treats them as absent.
    records = normalize_catalog(df.to_dict(orient="records"))
    if len(records) < len(df):
        logger.info("Dropped %d catalog rows without an identifier", len(df) - len(records))
    return records


def get_catalog() -> list[PlantSpeciesRecord]:
    """Return the in-memory plant catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = _load(DEFAULT_ENGINE_CONFIG.catalog_path)
    return _catalog


def reload_catalog(path: Path | None = None) -> list[PlantSpeciesRecord]:
    """Reload the catalog from disk and invalidate cached suggestions."""
    global _catalog
    _catalog = _load(path or DEFAULT_ENGINE_CONFIG.catalog_path)
    invalidate()
    return _catalog

