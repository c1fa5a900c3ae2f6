"""Resolve scene IDs to their storage folders and band URLs."""
from dataclasses import dataclass
from typing import Dict

from iabroker.errors import InvalidIdentifierError
from iabroker.scenes.bands import (
    LANDSAT_BAND_HOST,
    SENTINEL_BAND_HOST,
    compose_band_urls,
    legacy_folder_url,
    sentinel_folder_url,
)
from iabroker.scenes.identifiers import (
    IdentifierConvention,
    check_data_type,
    parse_identifier,
    recognized_convention,
)


@dataclass(frozen=True)
class ResolvedScene:
    """Storage locations of one scene."""

    scene_id: str
    convention: IdentifierConvention
    folder_url: str
    bands: Dict[str, str]


class SceneResolver:
    """Turns scene IDs into band URLs, consulting the catalog for Collection-1 scenes."""

    def __init__(self, catalog, landsat_host=LANDSAT_BAND_HOST, sentinel_host=SENTINEL_BAND_HOST):
        self.catalog = catalog
        self.landsat_host = landsat_host
        self.sentinel_host = sentinel_host

    def resolve(self, scene_id, data_type=None):
        """
        Resolve a scene ID.

        Args:
            scene_id: Landsat or Sentinel-2 scene ID
            data_type: Optional Landsat data-type qualifier (L1T, L1TP, ...)

        Returns:
            ResolvedScene

        Raises:
            IdentifierError: Invalid, malformed or wrongly qualified ID
            CatalogNotReadyError: Collection-1 ID before the catalog is loaded
            SceneNotFoundError: Collection-1 ID missing from the catalog
        """
        parsed = parse_identifier(scene_id)
        check_data_type(parsed, data_type)

        entry = None
        if parsed.convention is IdentifierConvention.COLLECTION_ONE_LANDSAT:
            entry = self.catalog.entry_for(scene_id)
            folder = entry.folder_url
        elif parsed.convention is IdentifierConvention.LEGACY_LANDSAT:
            folder = legacy_folder_url(parsed, self.landsat_host)
        else:
            folder = sentinel_folder_url(parsed, self.sentinel_host)

        bands = compose_band_urls(
            parsed, entry, landsat_host=self.landsat_host, sentinel_host=self.sentinel_host
        )
        return ResolvedScene(scene_id, parsed.convention, folder, bands)

    def folder_url(self, scene_id):
        """
        S3 folder holding a Landsat scene's files.

        Raises:
            InvalidIdentifierError: Not a Landsat ID
        """
        if recognized_convention(scene_id) not in (
            IdentifierConvention.LEGACY_LANDSAT,
            IdentifierConvention.COLLECTION_ONE_LANDSAT,
        ):
            raise InvalidIdentifierError(scene_id)
        return self.resolve(scene_id).folder_url

    def attach_bands(self, scene, data_type=None):
        """
        Copy of a scene with its band URLs filled in.

        Scenes whose IDs are not Landsat or Sentinel-2 IDs are returned unchanged.
        """
        if recognized_convention(scene.scene_id) is None:
            return scene
        return scene.with_bands(self.resolve(scene.scene_id, data_type).bands)
