from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class EngineConfig:
    default_limit: int = 12
    max_limit: int = 50
    cache_ttl: float = 300.0  # 5 minutes
    cache_max_entries: int = 1000
    catalog_path: Path = _DATA_DIR / "processed" / "plants.csv"


DEFAULT_ENGINE_CONFIG = EngineConfig()
