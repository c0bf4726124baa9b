"""
Catalog and space normalization.

Raw plant records arrive from several sources (the bundled CSV, the
per-category ingestion files, provider payloads, client previews) and
disagree on field names.  Each canonical field is resolved here, once,
from an ordered tuple of accepted source keys: the first key holding a
usable value wins.  Nothing in this module raises on bad input; an
unusable value simply becomes ``None`` or the field default.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from .models import PlantSpeciesRecord, Space

PLANT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "slug": ("slug", "id", "_id", "plant_slug", "code"),
    "common_name": ("common_name", "name", "title"),
    "scientific_name": ("scientific_name", "scientific", "binomial"),
    "min_sun_hours": ("min_sun_hours",),
    "max_sun_hours": ("max_sun_hours",),
    "indoor_ok": ("indoor_ok",),
    "difficulty": ("difficulty",),
    "pot_size_min_liters": ("pot_size_min_liters", "pot_liters", "pot_min_liters"),
    "watering_need": ("watering_need", "water"),
    "fertilization_freq_days": ("fertilization_freq_days", "fertilize_days", "fert_days"),
    "soil_type": ("soil_type",),
    "tags": ("tags",),
}

SPACE_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "_id"),
    "name": ("name",),
    "type": ("type", "space_type"),
    "direction": ("direction",),
    "sunlight_hours": ("sunlight_hours", "sun_hours", "sunlightHours"),
    "area_sq_m": ("area_sq_m", "area_square_meters", "areaSquareMeters", "area"),
    "notes": ("notes",),
}

SPACE_TYPES = ("balcony", "windowsill", "terrace", "indoor")

_LEVELS = {"low": "low", "med": "med", "medium": "med", "high": "high"}
_DIFFICULTIES = {"easy": "easy", "med": "med", "medium": "med", "hard": "hard"}
_TRUE_STRINGS = {"true", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "no", "n", "0"}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _first_present(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if not _is_missing(value):
            return value
    return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_bool(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        return None
    try:
        return bool(value)
    except (TypeError, ValueError):
        return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _as_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        parts: Iterable[Any] = value.replace("|", ",").split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        parts = value
    else:
        return []

    tags: list[str] = []
    for part in parts:
        if not isinstance(part, str):
            continue
        tag = part.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _as_mapping(raw: Any) -> Mapping[str, Any] | None:
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, Mapping):
        return raw
    return None


def normalize_plant(raw: Any) -> PlantSpeciesRecord | None:
    """Map one raw catalog entry onto the canonical record.

    Returns ``None`` when the entry has no usable identifier, since such a
    record could never be returned as a suggestion.
    """
    data = _as_mapping(raw)
    if data is None:
        return None

    def pick(field: str) -> Any:
        return _first_present(data, PLANT_FIELD_ALIASES[field])

    slug = _as_text(pick("slug"))
    if not slug:
        return None

    watering = _as_text(pick("watering_need"))
    difficulty = _as_text(pick("difficulty"))

    return PlantSpeciesRecord(
        slug=slug,
        common_name=_as_text(pick("common_name")) or "-",
        scientific_name=_as_text(pick("scientific_name")) or "",
        min_sun_hours=_as_float(pick("min_sun_hours")),
        max_sun_hours=_as_float(pick("max_sun_hours")),
        indoor_ok=_as_bool(pick("indoor_ok")),
        difficulty=_DIFFICULTIES.get(difficulty.lower()) if difficulty else None,
        pot_size_min_liters=_as_float(pick("pot_size_min_liters")),
        watering_need=_LEVELS.get(watering.lower(), "med") if watering else "med",
        fertilization_freq_days=_as_float(pick("fertilization_freq_days")),
        soil_type=_as_text(pick("soil_type")),
        tags=_as_tags(pick("tags")),
    )


def normalize_catalog(raws: Iterable[Any] | None) -> list[PlantSpeciesRecord]:
    """Normalize every entry, dropping those without an identifier."""
    if not raws:
        return []
    records: list[PlantSpeciesRecord] = []
    for raw in raws:
        record = normalize_plant(raw)
        if record is not None:
            records.append(record)
    return records


def normalize_space(raw: Any) -> Space | None:
    """Map a raw space onto :class:`Space`; unknown fields become ``None``."""
    data = _as_mapping(raw)
    if data is None:
        return None

    def pick(field: str) -> Any:
        return _first_present(data, SPACE_FIELD_ALIASES[field])

    space_type = _as_text(pick("type"))
    if space_type:
        space_type = space_type.lower()

    return Space(
        id=_as_text(pick("id")),
        name=_as_text(pick("name")),
        type=space_type if space_type in SPACE_TYPES else None,
        direction=_as_text(pick("direction")),
        sunlight_hours=_as_float(pick("sunlight_hours")),
        area_sq_m=_as_float(pick("area_sq_m")),
        notes=_as_text(pick("notes")),
    )


def coerce_catalog(entries: Iterable[Any] | None) -> list[PlantSpeciesRecord]:
    """Pass canonical records through and normalize anything else."""
    if not entries:
        return []
    records: list[PlantSpeciesRecord] = []
    for entry in entries:
        record = entry if isinstance(entry, PlantSpeciesRecord) else normalize_plant(entry)
        if record is not None:
            records.append(record)
    return records
