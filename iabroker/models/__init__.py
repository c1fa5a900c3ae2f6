"""Data models."""

from iabroker.models.asset import Asset
from iabroker.models.catalog import CatalogEntry, CatalogSnapshot
from iabroker.models.scene import Scene

__all__ = ["Asset", "CatalogEntry", "CatalogSnapshot", "Scene"]
