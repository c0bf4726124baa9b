from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the catalog ingestion pipeline.
    """

    raw_data_dir: Path = _DATA_DIR / "raw"
    processed_data_dir: Path = _DATA_DIR / "processed"
    processed_filename: str = "plants.csv"
    categories: tuple[str, ...] = (
        "herbs",
        "vegetables",
        "fruits",
        "indoor_plants",
        "outdoor_plants",
        "flowers",
    )

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
