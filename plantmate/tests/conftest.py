from __future__ import annotations

import pytest

from plantmate.analytics.store import clear_events
from plantmate.recommendations.cache import clear_cache
from plantmate.spaces.store import clear_spaces


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch):
    clear_cache()
    clear_events()
    clear_spaces()
    # Keep tests offline; individual tests patch the provider when they need it.
    monkeypatch.setattr("plantmate.recommendations.retrieval.suggest_plants", lambda *a, **kw: [])
    yield
    clear_cache()
    clear_events()
    clear_spaces()
