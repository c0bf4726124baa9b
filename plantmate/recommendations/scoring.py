"""
Rule-based plant suitability scoring.

Responsibilities:
- Score one (space, plant) pair with a weighted additive model.
- Explain the score through the dominant contributing factor.
- Rank a whole catalog against a space, deterministically.

This is the fallback path used whenever the external suggestion provider
is unavailable or unusable, and the single scoring policy shared by every
caller (API, previews, ingestion checks).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .catalog import coerce_catalog, normalize_space
from .models import PlantSpeciesRecord, Space, Suggestion

WEIGHTS: dict[str, float] = {
    "sunlight": 40.0,
    "indoor_match": 20.0,
    "indoor_penalty": -15.0,
    "space_affinity": 15.0,
    "easy": 10.0,
    "hard": -5.0,
    "pot_fits": 10.0,
    "pot_too_big": -5.0,
    "watering": 5.0,
}

SUN_TOLERANCE_HOURS = 6.0
POT_FOOTPRINT_PER_LITER = 0.1
DEFAULT_MIN_SUN = 0.0
DEFAULT_MAX_SUN = 12.0
DEFAULT_LIMIT = 12
FALLBACK_TAG = "fallback"

INDOOR_SPACES = frozenset({"windowsill", "indoor"})
OUTDOOR_SPACES = frozenset({"balcony", "terrace"})
OUTDOOR_TAGS = frozenset({"fruiting", "vegetable", "outdoor"})
INDOOR_TAGS = frozenset({"herb", "shade-tolerant"})


def round_score(value: float) -> float:
    """Round a non-negative score to one decimal, halves going up."""
    return math.floor(value * 10 + 0.5) / 10


@dataclass(frozen=True)
class Reason:
    factor: str
    text: str
    points: float


@dataclass
class PlantScore:
    score: float
    reasons: list[Reason] = field(default_factory=list)
    rationale: str = ""


def _hours(value: float) -> str:
    return f"{value:g}h"


def _sunlight(space: Space, plant: PlantSpeciesRecord) -> Reason | None:
    sun = space.sunlight_hours
    if sun is None:
        return None
    if plant.min_sun_hours is None and plant.max_sun_hours is None:
        return None

    min_sun = plant.min_sun_hours if plant.min_sun_hours is not None else DEFAULT_MIN_SUN
    max_sun = plant.max_sun_hours if plant.max_sun_hours is not None else DEFAULT_MAX_SUN
    if min_sun <= sun <= max_sun:
        ideal = (min_sun + max_sun) / 2
        diff = abs(sun - ideal)
        points = max(0.0, WEIGHTS["sunlight"] * (1 - diff / SUN_TOLERANCE_HOURS))
        return Reason("sunlight", f"Sunlight fits ({_hours(sun)} within {min_sun:g}-{_hours(max_sun)})", points)
    # Out of range contributes nothing; the reason is kept for the rationale.
    return Reason(
        "sunlight",
        f"Sunlight mismatch (needs {min_sun:g}-{_hours(max_sun)}, space has {_hours(sun)})",
        0.0,
    )


def _indoor_outdoor(space: Space, plant: PlantSpeciesRecord) -> Reason | None:
    if space.type is None or plant.indoor_ok is None:
        return None
    is_indoor = space.type in INDOOR_SPACES
    if is_indoor and plant.indoor_ok:
        return Reason("indoor_outdoor", "Indoor-friendly", WEIGHTS["indoor_match"])
    if not is_indoor and not plant.indoor_ok:
        return Reason("indoor_outdoor", "Outdoor-optimized", WEIGHTS["indoor_match"])
    if is_indoor and not plant.indoor_ok:
        return Reason("indoor_outdoor", "Not suitable for indoor", WEIGHTS["indoor_penalty"])
    return None


def _space_affinity(space: Space, plant: PlantSpeciesRecord) -> Reason | None:
    tags = set(plant.tags)
    if space.type in OUTDOOR_SPACES and tags & OUTDOOR_TAGS:
        return Reason("space_type", f"Great for {space.type} growing", WEIGHTS["space_affinity"])
    if space.type in INDOOR_SPACES and (tags & INDOOR_TAGS or plant.indoor_ok is True):
        return Reason("space_type", f"Well suited to a {space.type}", WEIGHTS["space_affinity"])
    return None


def _difficulty(plant: PlantSpeciesRecord) -> Reason | None:
    if plant.difficulty == "easy":
        return Reason("difficulty", "Easy to care for", WEIGHTS["easy"])
    if plant.difficulty == "hard":
        return Reason("difficulty", "Requires experience", WEIGHTS["hard"])
    return None


def _pot_fit(space: Space, plant: PlantSpeciesRecord) -> Reason | None:
    pot = plant.pot_size_min_liters
    area = space.area_sq_m
    if not pot or pot <= 0 or area is None or area <= 0:
        return None
    if area >= pot * POT_FOOTPRINT_PER_LITER:
        return Reason("pot", "Fits your space", WEIGHTS["pot_fits"])
    return Reason("pot", "May need a larger space", WEIGHTS["pot_too_big"])


def _watering(space: Space, plant: PlantSpeciesRecord) -> Reason | None:
    sun = space.sunlight_hours
    if sun is None:
        return None
    if sun >= 6 and plant.watering_need in ("med", "high"):
        return Reason("watering", "Water needs match the sunlight", WEIGHTS["watering"])
    if sun < 4 and plant.watering_need == "low":
        return Reason("watering", "Low water need suits low light", WEIGHTS["watering"])
    return None


def build_rationale(score: float, reasons: list[Reason]) -> str:
    """Describe the score through the first factor that added points."""
    top = next((r for r in reasons if r.points > 0), None)
    if top is None:
        top = reasons[0] if reasons else None
    text = top.text if top else "General match"

    if score >= 70:
        label = "Excellent match"
    elif score >= 50:
        label = "Good match"
    else:
        label = "Fair match"
    return f"{label}: {text}"


def score_plant(space: Space, plant: PlantSpeciesRecord) -> PlantScore:
    """Score a plant against a space on a 0-100 scale."""
    candidates = (
        _sunlight(space, plant),
        _indoor_outdoor(space, plant),
        _space_affinity(space, plant),
        _difficulty(plant),
        _pot_fit(space, plant),
        _watering(space, plant),
    )
    reasons = [r for r in candidates if r is not None]

    total = sum(r.points for r in reasons)
    score = round_score(min(100.0, max(0.0, total)))
    return PlantScore(score=score, reasons=reasons, rationale=build_rationale(score, reasons))


def rank_plants(
    space: Space | dict[str, Any] | None,
    catalog: list[PlantSpeciesRecord | dict[str, Any]],
    limit: int = DEFAULT_LIMIT,
) -> list[Suggestion]:
    """Return the best-scoring plants for ``space``, highest score first.

    Plants scoring zero are left out.  Equal scores keep catalog order.
    Raw space mappings and catalog entries are normalized first.
    """
    if not isinstance(space, Space):
        space = normalize_space(space)
    catalog = coerce_catalog(catalog)
    if space is None or not catalog or limit <= 0:
        return []

    scored: list[Suggestion] = []
    for plant in catalog:
        result = score_plant(space, plant)
        if result.score <= 0:
            continue
        scored.append(Suggestion(
            plant_slug=plant.slug,
            score=result.score,
            rationale=result.rationale,
            tags=[FALLBACK_TAG],
            common_name=plant.common_name,
            scientific_name=plant.scientific_name,
        ))

    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:limit]
