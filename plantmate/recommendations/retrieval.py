from __future__ import annotations

import logging
import math
import time
from typing import Any

from ..analytics.store import record_event
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import suggest_plants
from .cache import cache_get, cache_set
from .catalog import coerce_catalog, normalize_space
from .config import DEFAULT_ENGINE_CONFIG
from .models import PlantSpeciesRecord, Space, Suggestion, SuggestionsResponse
from .scoring import rank_plants, round_score

logger = logging.getLogger(__name__)


def _resolve_provider_results(
    raw_results: list[dict[str, Any]],
    catalog: list[PlantSpeciesRecord],
    limit: int,
) -> list[Suggestion]:
    """Keep provider entries that name a catalog plant, best score first."""
    by_slug = {p.slug: p for p in catalog}
    seen: set[str] = set()
    items: list[Suggestion] = []
    for entry in raw_results:
        slug = entry.get("plant_slug")
        plant = by_slug.get(slug)
        if plant is None or slug in seen:
            continue
        score = entry.get("score")
        if not isinstance(score, (int, float)) or not math.isfinite(score):
            continue
        score = round_score(min(100.0, max(0.0, float(score))))
        if score <= 0:
            continue
        seen.add(slug)
        items.append(Suggestion(
            plant_slug=slug,
            score=score,
            rationale=entry.get("rationale") or "Suggested by AI.",
            tags=list(entry.get("tags") or []),
            common_name=plant.common_name,
            scientific_name=plant.scientific_name,
        ))

    items.sort(key=lambda s: s.score, reverse=True)
    return items[:limit]


def get_suggestions(
    space: Space | dict[str, Any] | None,
    catalog: list[PlantSpeciesRecord | dict[str, Any]],
    limit: int = DEFAULT_ENGINE_CONFIG.default_limit,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> SuggestionsResponse:
    """Suggest plants for a space, preferring the LLM and falling back to rules.

    The rule-based engine answers whenever the LLM is disabled, fails, or
    names no plant that exists in ``catalog``.  Raw catalog entries are
    normalized, and the cache key covers every catalog field.
    """
    start_time = time.time()

    space = normalize_space(space)
    catalog = coerce_catalog(catalog)
    if space is None or not catalog:
        return SuggestionsResponse(suggestions=[], source="fallback")

    # --- Cache check ---
    request_dict = {
        "space": space.model_dump(exclude={"id", "name", "notes"}),
        "limit": limit,
        "catalog": [p.model_dump() for p in catalog],
    }
    cached = cache_get(request_dict)
    if cached is not None:
        _record(space, cached, start_time, cache_hit=True)
        return cached

    # --- LLM first ---
    items = _resolve_provider_results(suggest_plants(space, catalog, config), catalog, limit)
    if items:
        response = SuggestionsResponse(suggestions=items, source="ai")
    else:
        logger.info("No usable LLM suggestions for space %s, using rule-based scoring", space.id)
        response = SuggestionsResponse(
            suggestions=rank_plants(space, catalog, limit),
            source="fallback",
        )

    cache_set(request_dict, response)
    _record(space, response, start_time, cache_hit=False)
    return response


def _record(space: Space, response: SuggestionsResponse, start_time: float, cache_hit: bool) -> None:
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("suggestions", {
        "space_id": space.id,
        "space_type": space.type,
        "sunlight_hours": space.sunlight_hours,
        "source": response.source,
        "results_returned": len(response.suggestions),
        "plant_slugs": [s.plant_slug for s in response.suggestions],
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })
