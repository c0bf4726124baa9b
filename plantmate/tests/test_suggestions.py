from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from plantmate.app import app
from plantmate.recommendations.models import PlantSpeciesRecord, Space
from plantmate.recommendations.retrieval import get_suggestions

client = TestClient(app)

CATALOG = [
    PlantSpeciesRecord(slug="basil", common_name="Basil", min_sun_hours=5, max_sun_hours=8, indoor_ok=True, difficulty="easy", tags=["herb"]),
    PlantSpeciesRecord(slug="mint", common_name="Mint", min_sun_hours=3, max_sun_hours=6, indoor_ok=True, difficulty="easy", tags=["herb"]),
    PlantSpeciesRecord(slug="chilli", common_name="Chilli", min_sun_hours=6, max_sun_hours=8, indoor_ok=False, difficulty="med", tags=["fruiting"]),
]

BALCONY = Space(id="s1", sunlight_hours=6, type="balcony", area_sq_m=1.8)

BALCONY_BODY = {"name": "South balcony", "type": "balcony", "sunlight_hours": 6, "area_sq_m": 1.8}


def _create_space(body: dict | None = None) -> str:
    resp = client.post("/spaces", json=body or BALCONY_BODY)
    assert resp.status_code == 201
    return resp.json()["id"]


# ── Provider first, rules as fallback ────────────────────────────────────


@patch("plantmate.recommendations.retrieval.suggest_plants")
def test_provider_results_are_used_when_they_resolve(mock_suggest):
    mock_suggest.return_value = [
        {"plant_slug": "basil", "score": 88, "rationale": "Great herb.", "tags": ["easy"]},
        {"plant_slug": "unknown-plant", "score": 99, "rationale": "Not in catalog.", "tags": []},
        {"plant_slug": "mint", "score": 92.26, "rationale": "Loves partial sun.", "tags": []},
    ]

    response = get_suggestions(BALCONY, CATALOG)

    assert response.source == "ai"
    assert [s.plant_slug for s in response.suggestions] == ["mint", "basil"]
    assert response.suggestions[0].score == 92.3
    assert response.suggestions[0].common_name == "Mint"
    assert response.suggestions[1].tags == ["easy"]


@patch("plantmate.recommendations.retrieval.suggest_plants")
def test_provider_scores_are_clamped_and_filtered(mock_suggest):
    mock_suggest.return_value = [
        {"plant_slug": "chilli", "score": 140, "rationale": "Very sunny.", "tags": []},
        {"plant_slug": "chilli", "score": 60, "rationale": "Duplicate.", "tags": []},
        {"plant_slug": "mint", "score": 0, "rationale": "Too sunny.", "tags": []},
        {"plant_slug": "basil", "score": float("nan"), "rationale": "Broken.", "tags": []},
    ]

    response = get_suggestions(BALCONY, CATALOG)

    assert response.source == "ai"
    assert [(s.plant_slug, s.score) for s in response.suggestions] == [("chilli", 100.0)]


@patch("plantmate.recommendations.retrieval.suggest_plants")
def test_provider_results_respect_limit(mock_suggest):
    mock_suggest.return_value = [
        {"plant_slug": p.slug, "score": 50 + i, "rationale": "ok", "tags": []}
        for i, p in enumerate(CATALOG)
    ]

    response = get_suggestions(BALCONY, CATALOG, limit=2)

    assert [s.plant_slug for s in response.suggestions] == ["chilli", "mint"]


@patch("plantmate.recommendations.retrieval.suggest_plants", return_value=[])
def test_fallback_when_provider_returns_nothing(mock_suggest):
    response = get_suggestions(BALCONY, CATALOG)

    assert response.source == "fallback"
    assert [s.plant_slug for s in response.suggestions] == ["chilli", "basil", "mint"]
    assert all(s.tags == ["fallback"] for s in response.suggestions)
    mock_suggest.assert_called_once()


@patch("plantmate.recommendations.retrieval.suggest_plants")
def test_fallback_when_no_provider_slug_resolves(mock_suggest):
    mock_suggest.return_value = [
        {"plant_slug": "orchid", "score": 95, "rationale": "Not in catalog.", "tags": []},
    ]

    response = get_suggestions(BALCONY, CATALOG)

    assert response.source == "fallback"
    assert response.suggestions[0].plant_slug == "chilli"


@patch("plantmate.recommendations.retrieval.suggest_plants")
def test_missing_space_returns_empty(mock_suggest):
    response = get_suggestions(None, CATALOG)

    assert response.suggestions == []
    mock_suggest.assert_not_called()


def test_empty_catalog_returns_empty():
    assert get_suggestions(BALCONY, []).suggestions == []


RAW_CATALOG = [
    {"id": "basil", "name": "Basil", "min_sun_hours": "5", "max_sun_hours": 8, "indoor_ok": "yes", "difficulty": "easy", "tags": "herb"},
    {"name": "No identifier", "difficulty": "easy"},
    {"code": "mint", "title": "Mint", "min_sun_hours": 3, "max_sun_hours": 6, "indoor_ok": True, "difficulty": "Easy", "tags": ["herb"]},
    {"slug": "chilli", "name": "Chilli", "min_sun_hours": 6, "max_sun_hours": 8, "indoor_ok": "no", "difficulty": "medium", "tags": "fruiting"},
]


def test_raw_catalog_entries_are_normalized():
    response = get_suggestions({"sunlight_hours": 6, "type": "balcony", "area_sq_m": 1.8}, RAW_CATALOG)

    assert response.source == "fallback"
    assert [s.plant_slug for s in response.suggestions] == ["chilli", "basil", "mint"]
    assert response.suggestions[0].common_name == "Chilli"


def test_raw_space_mapping_is_accepted():
    response = get_suggestions({"sunlightHours": 6, "space_type": "balcony", "area": 1.8}, CATALOG)

    assert [s.plant_slug for s in response.suggestions] == ["chilli", "basil", "mint"]


def test_fallback_and_engine_agree():
    response = get_suggestions(BALCONY, CATALOG)
    again = get_suggestions(BALCONY.model_copy(update={"id": "s2"}), CATALOG)

    assert response.model_dump() == again.model_dump()


# ── HTTP surface ─────────────────────────────────────────────────────────


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_catalog_sorted_by_common_name():
    resp = client.get("/plants/catalog")
    assert resp.status_code == 200
    names = [p["common_name"].lower() for p in resp.json()]
    assert len(names) == 29
    assert names == sorted(names)


def test_suggestions_for_saved_space():
    space_id = _create_space()
    resp = client.get("/plants/suggestions", params={"space_id": space_id})
    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "fallback"
    scores = [s["score"] for s in body["suggestions"]]
    assert 0 < len(scores) <= 12
    assert scores == sorted(scores, reverse=True)
    assert all(score > 0 for score in scores)


def test_suggestions_respect_limit():
    space_id = _create_space()
    resp = client.get("/plants/suggestions", params={"space_id": space_id, "limit": 3})
    assert resp.status_code == 200
    assert len(resp.json()["suggestions"]) == 3


def test_suggestions_unknown_space_is_empty():
    resp = client.get("/plants/suggestions", params={"space_id": "does-not-exist"})
    assert resp.status_code == 200
    assert resp.json() == {"suggestions": [], "source": "fallback"}


def test_suggestions_validation():
    space_id = _create_space()
    assert client.get("/plants/suggestions", params={"space_id": space_id, "limit": 0}).status_code == 422
    assert client.get("/plants/suggestions", params={"space_id": space_id, "limit": 51}).status_code == 422
    assert client.get("/plants/suggestions").status_code == 422


def test_preview_matches_saved_space():
    space_id = _create_space()
    saved = client.get("/plants/suggestions", params={"space_id": space_id, "limit": 5}).json()
    preview = client.post("/plants/suggestions/preview", json={"space": BALCONY_BODY, "limit": 5})

    assert preview.status_code == 200
    assert preview.json() == saved


def test_preview_shade_space_prefers_shade_plants():
    body = {"space": {"name": "Hall", "type": "indoor", "sunlight_hours": 2, "area_sq_m": 0.5}, "limit": 3}
    resp = client.post("/plants/suggestions/preview", json=body)
    assert resp.status_code == 200
    for suggestion in resp.json()["suggestions"]:
        assert suggestion["plant_slug"] in {
            "pothos", "snake-plant", "peace-lily", "zz-plant", "african-violet", "mint", "spinach",
        }
