"""
Plant suggestion engine.

Responsibilities:
- Normalize heterogeneous catalog records and space descriptions.
- Score every catalog plant against a growing space with fixed weights.
- Rank and explain the suitable plants, deterministically.
- Prefer LLM suggestions when they resolve against the catalog, and fall
  back to rule-based scoring otherwise.
"""
