from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from groq import Groq

from ..recommendations.models import PlantSpeciesRecord, Space
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 50.0

SYSTEM_PROMPT = (
    "You are a gardening expert and plant recommendation engine. "
    "Given a growing SPACE and a list of candidate PLANTS, score each plant "
    "from 0 to 100 for how well it suits the space and give a short, "
    "one-sentence rationale. Focus on sunlight, care difficulty and space type.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"suggestions": [{"plant_slug": "<slug>", "score": 85, '
    '"rationale": "<one sentence>", "tags": ["<tag>"]}]}\n'
    "Use only slugs from the provided list."
)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _fmt(value: float | None) -> str:
    return "?" if value is None else f"{value:g}"


def _build_user_message(space: Space, catalog: list[PlantSpeciesRecord]) -> str:
    lines = ["## Space"]
    if space.type:
        lines.append(f"- Type: {space.type}")
    if space.sunlight_hours is not None:
        lines.append(f"- Sunlight: {space.sunlight_hours:g} hours/day")
    if space.area_sq_m is not None:
        lines.append(f"- Area: {space.area_sq_m:g} m²")
    if space.direction:
        lines.append(f"- Facing: {space.direction}")

    lines.append("\n## Candidate Plants")
    lines.append("| Slug | Name | Sun (h) | Indoor | Difficulty | Water | Pot (L) | Tags |")
    lines.append("|---|---|---|---|---|---|---|---|")
    for p in catalog:
        lines.append(
            f"| {p.slug} | {p.common_name} | {_fmt(p.min_sun_hours)}-{_fmt(p.max_sun_hours)} "
            f"| {'?' if p.indoor_ok is None else ('yes' if p.indoor_ok else 'no')} "
            f"| {p.difficulty or '?'} | {p.watering_need} "
            f"| {_fmt(p.pot_size_min_liters)} "
            f"| {', '.join(p.tags)} |"
        )

    return "\n".join(lines)


def _parse_content(content: str) -> list[dict[str, Any]]:
    parsed = json.loads(_FENCE_RE.sub("", content).strip())
    if isinstance(parsed, dict):
        parsed = parsed.get("suggestions") or parsed.get("recommendations") or []
    if not isinstance(parsed, list):
        return []

    results: list[dict[str, Any]] = []
    for item in parsed:
        if not isinstance(item, dict):
            continue
        slug = str(item.get("plant_slug") or item.get("slug") or item.get("id") or "").strip()
        if not slug:
            continue
        try:
            score = float(item.get("score"))
        except (TypeError, ValueError):
            score = DEFAULT_SCORE
        # A zero or NaN score means the model gave no usable value
        if not score or math.isnan(score):
            score = DEFAULT_SCORE
        tags = item.get("tags")
        results.append({
            "plant_slug": slug,
            "score": score,
            "rationale": str(item.get("rationale") or "Suggested by AI."),
            "tags": [str(t) for t in tags] if isinstance(tags, list) else [],
        })
    return results


def suggest_plants(
    space: Space,
    catalog: list[PlantSpeciesRecord],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> list[dict[str, Any]]:
    """
    Ask Groq LLM to score catalog plants for a space.

    Returns a list of ``{plant_slug, score, rationale, tags}`` dicts in the
    order the model produced them. Returns an empty list on any failure
    (disabled, missing key, timeout, bad JSON, API error).
    """
    if not config.enabled or not config.api_key:
        return []

    if not catalog:
        return []

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": _build_user_message(space, catalog),
                },
            ],
            max_tokens=config.max_tokens,
            temperature=0.3,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        return _parse_content(content)

    except Exception:
        logger.warning("Groq LLM call failed, falling back to rule-based scoring", exc_info=True)
        return []
