from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    requests = [e for e in events if e["type"] == "suggestions"]
    total = len(requests)

    # Average response time
    times = [r["response_time_ms"] for r in requests if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Where the answer came from
    source_counter: Counter[str] = Counter(r.get("source", "fallback") for r in requests)
    fallback = source_counter.get("fallback", 0)

    # Space types asked about
    type_counter: Counter[str] = Counter()
    for r in requests:
        type_counter[r.get("space_type") or "unknown"] += 1
    top_space_types = [{"name": n, "count": c} for n, c in type_counter.most_common(10)]

    # Most suggested plants
    plant_counter: Counter[str] = Counter()
    for r in requests:
        for slug in r.get("plant_slugs", []) or []:
            plant_counter[slug] += 1
    top_plants = [{"name": n, "count": c} for n, c in plant_counter.most_common(10)]

    empty_results = sum(1 for r in requests if not r.get("results_returned"))

    # Cache stats
    cache_hits = sum(1 for r in requests if r.get("cache_hit"))
    cache_misses = total - cache_hits

    return {
        "total_requests": total,
        "avg_response_time_ms": avg_time,
        "source_usage": dict(source_counter),
        "fallback_rate": round(fallback / total * 100, 1) if total else 0.0,
        "empty_results": empty_results,
        "top_space_types": top_space_types,
        "top_plants": top_plants,
        "cache_stats": {
            "hits": cache_hits,
            "misses": cache_misses,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
    }
