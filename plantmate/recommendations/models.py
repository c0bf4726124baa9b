from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SpaceType = Literal["balcony", "windowsill", "terrace", "indoor"]
Difficulty = Literal["easy", "med", "hard"]
WateringNeed = Literal["low", "med", "high"]


class Space(BaseModel):
    id: str | None = None
    name: str | None = None
    type: SpaceType | None = None
    direction: str | None = None
    sunlight_hours: float | None = None
    area_sq_m: float | None = None
    notes: str | None = None


class PlantSpeciesRecord(BaseModel):
    slug: str = Field(..., min_length=1)
    common_name: str = "-"
    scientific_name: str = ""
    min_sun_hours: float | None = None
    max_sun_hours: float | None = None
    indoor_ok: bool | None = None
    difficulty: Difficulty | None = None
    pot_size_min_liters: float | None = None
    watering_need: WateringNeed = "med"
    fertilization_freq_days: float | None = None
    soil_type: str | None = None
    tags: list[str] = Field(default_factory=list)


class Suggestion(BaseModel):
    plant_slug: str
    score: float = Field(..., ge=0.0, le=100.0)
    rationale: str
    tags: list[str] = Field(default_factory=list)
    common_name: str | None = None
    scientific_name: str | None = None


class SuggestionsResponse(BaseModel):
    suggestions: list[Suggestion]
    source: Literal["ai", "fallback"] = "fallback"


class SpaceCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: SpaceType | None = None
    direction: str | None = None
    sunlight_hours: float | None = Field(default=None, ge=0.0, le=12.0)
    area_sq_m: float | None = Field(default=None, gt=0.0)
    notes: str | None = None


class PreviewRequest(BaseModel):
    space: SpaceCreate
    limit: int = Field(default=12, ge=1, le=50)
