"""
Cache-aside store for suggestion responses.

Entries expire after ``EngineConfig.cache_ttl`` seconds and are swept on
every write; the store never holds more than ``cache_max_entries``.
Reloading the catalog calls :func:`invalidate`, which drops every entry
but keeps the hit/miss counters so ``/cache/stats`` still reflects the
process lifetime.
"""
from __future__ import annotations

import hashlib
import json
import time
from typing import Any

from .config import DEFAULT_ENGINE_CONFIG

_entries: dict[str, tuple[float, Any]] = {}
_stats = {"hits": 0, "misses": 0, "invalidations": 0}


def make_key(request: dict[str, Any]) -> str:
    payload = json.dumps(request, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode()).hexdigest()[:16]


def cache_get(request: dict[str, Any], ttl: float = DEFAULT_ENGINE_CONFIG.cache_ttl) -> Any | None:
    key = make_key(request)
    entry = _entries.get(key)
    if entry is not None:
        stored_at, value = entry
        if time.time() - stored_at < ttl:
            _stats["hits"] += 1
            return value
        del _entries[key]
    _stats["misses"] += 1
    return None


def cache_set(
    request: dict[str, Any],
    value: Any,
    ttl: float = DEFAULT_ENGINE_CONFIG.cache_ttl,
    max_entries: int = DEFAULT_ENGINE_CONFIG.cache_max_entries,
) -> None:
    key = make_key(request)
    now = time.time()
    _entries.pop(key, None)
    for stale in [k for k, (stored_at, _) in _entries.items() if now - stored_at >= ttl]:
        del _entries[stale]
    # Oldest entries go first once the cap is reached
    while _entries and len(_entries) >= max_entries:
        del _entries[next(iter(_entries))]
    _entries[key] = (now, value)


def invalidate() -> None:
    _entries.clear()
    _stats["invalidations"] += 1


def get_cache_stats() -> dict[str, Any]:
    lookups = _stats["hits"] + _stats["misses"]
    return {
        "size": len(_entries),
        **_stats,
        "hit_rate": round(_stats["hits"] / lookups * 100, 1) if lookups else 0.0,
    }


def clear_cache() -> None:
    _entries.clear()
    for name in _stats:
        _stats[name] = 0
