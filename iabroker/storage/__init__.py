"""Scene catalog storage."""

from iabroker.storage.catalog import SceneCatalog, parse_scene_list

__all__ = ["SceneCatalog", "parse_scene_list"]
