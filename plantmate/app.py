from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .recommendations.cache import get_cache_stats
from .recommendations.config import DEFAULT_ENGINE_CONFIG
from .recommendations.data_store import get_catalog
from .recommendations.models import (
    PlantSpeciesRecord,
    PreviewRequest,
    Space,
    SpaceCreate,
    SuggestionsResponse,
)
from .recommendations.retrieval import get_suggestions
from .spaces.store import create_space, delete_space, get_space, list_spaces

app = FastAPI(title="PlantMate Suggestion API", version="1.0.0")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/plants/catalog", response_model=list[PlantSpeciesRecord])
def catalog() -> list[PlantSpeciesRecord]:
    return sorted(get_catalog(), key=lambda p: p.common_name.lower())


# ── Suggestions ──────────────────────────────────────────────────────────


@app.get("/plants/suggestions", response_model=SuggestionsResponse)
def suggestions(
    space_id: str = Query(..., min_length=1),
    limit: int = Query(DEFAULT_ENGINE_CONFIG.default_limit, ge=1, le=DEFAULT_ENGINE_CONFIG.max_limit),
) -> SuggestionsResponse:
    # An unknown space yields an empty list rather than a 404.
    return get_suggestions(get_space(space_id), get_catalog(), limit)


@app.post("/plants/suggestions/preview", response_model=SuggestionsResponse)
def suggestions_preview(body: PreviewRequest) -> SuggestionsResponse:
    space = Space(**body.space.model_dump())
    return get_suggestions(space, get_catalog(), body.limit)


# ── Spaces ───────────────────────────────────────────────────────────────


@app.post("/spaces", response_model=Space, status_code=201)
def add_space(body: SpaceCreate) -> Space:
    return create_space(body)


@app.get("/spaces", response_model=list[Space])
def spaces() -> list[Space]:
    return list_spaces()


@app.get("/spaces/{space_id}", response_model=Space)
def space_detail(space_id: str) -> Space:
    space = get_space(space_id)
    if space is None:
        raise HTTPException(status_code=404, detail="Space not found")
    return space


@app.delete("/spaces/{space_id}")
def remove_space(space_id: str) -> dict[str, str]:
    if not delete_space(space_id):
        raise HTTPException(status_code=404, detail="Space not found")
    return {"status": "deleted"}


# ── Operations ───────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
