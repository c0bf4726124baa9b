"""
Catalog ingestion package.

Responsibilities:
- Read the per-category raw plant files (herbs, vegetables, fruits, ...).
- Normalize them into the canonical plant species schema.
- Persist a single processed catalog locally for the suggestion engine.
"""
