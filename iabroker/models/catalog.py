"""Data models for the Collection-1 scene catalog."""
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class CatalogEntry:
    """Storage location of a Collection-1 Landsat scene."""

    scene_id: str
    folder_url: str  # always ends with "/"
    file_prefix: str

    def file_url(self, suffix):
        return f"{self.folder_url}{self.file_prefix}{suffix}"


@dataclass(frozen=True)
class CatalogSnapshot:
    """One complete refresh cycle's worth of catalog entries."""

    entries: Mapping[str, CatalogEntry]
    ready: bool = False
    refreshed_at: Optional[datetime] = None

    @classmethod
    def empty(cls):
        return cls(entries=MappingProxyType({}))

    @classmethod
    def from_entries(cls, entries, refreshed_at):
        return cls(entries=MappingProxyType(dict(entries)), ready=True, refreshed_at=refreshed_at)
