"""Ingestion layer.

Adapters that turn feature-service responses (or already-loaded feature
collections) into per-GeoId records ready to be merged into the store.
"""

__all__: list[str] = []
