"""Tests for scene resolution."""
import pytest

from iabroker.errors import (
    CatalogNotReadyError,
    InvalidIdentifierError,
    MalformedIdentifierError,
    SceneNotFoundError,
    UnknownDataTypeError,
)
from iabroker.models.scene import Scene
from iabroker.scenes.bands import BAND_NAMES
from iabroker.scenes.identifiers import IdentifierConvention
from iabroker.scenes.resolver import SceneResolver

from conftest import (
    C1_FOLDER,
    C1_PREFIX,
    C1_SCENE_ID,
    LEGACY_SCENE_ID,
    MISSING_C1_SCENE_ID,
    SENTINEL_SCENE_ID,
)


@pytest.fixture
def catalog(catalogs, fake_client, sample_scene_list):
    return catalogs(fake_client([sample_scene_list]))


@pytest.fixture
def resolver(catalog):
    return SceneResolver(catalog)


def test_legacy_scene_needs_no_catalog(resolver, catalog):
    resolved = resolver.resolve(LEGACY_SCENE_ID)

    assert not catalog.is_ready
    assert resolved.convention is IdentifierConvention.LEGACY_LANDSAT
    assert resolved.folder_url == "https://landsat-pds.s3.amazonaws.com/L8/006/052/LC80060522017107LGN00/"
    assert resolved.bands["red"].endswith("/006/052/LC80060522017107LGN00/LC80060522017107LGN00_B4.TIF")
    assert set(resolved.bands) == set(BAND_NAMES)


def test_collection_one_scene_before_catalog_ready(resolver):
    with pytest.raises(CatalogNotReadyError):
        resolver.resolve(C1_SCENE_ID)


def test_collection_one_scene_after_refresh(resolver, catalog):
    catalog.refresh()
    resolved = resolver.resolve(C1_SCENE_ID, data_type="L1TP")

    assert resolved.convention is IdentifierConvention.COLLECTION_ONE_LANDSAT
    assert resolved.folder_url == C1_FOLDER
    assert resolved.bands["red"] == f"{C1_FOLDER}{C1_PREFIX}_B4.TIF"
    assert len(resolved.bands) == 11


def test_collection_one_scene_missing_from_catalog(resolver, catalog):
    catalog.refresh()
    with pytest.raises(SceneNotFoundError):
        resolver.resolve(MISSING_C1_SCENE_ID)


def test_sentinel_scene(resolver):
    resolved = resolver.resolve(SENTINEL_SCENE_ID)
    assert resolved.convention is IdentifierConvention.SENTINEL2
    assert resolved.folder_url == "http://sentinel-s2-l1c.s3.amazonaws.com/tiles/11/S/KD/2016/5/13/0/"


def test_identifier_errors_propagate(resolver):
    with pytest.raises(InvalidIdentifierError):
        resolver.resolve("X_NOT_LANDSAT_X")
    with pytest.raises(MalformedIdentifierError):
        resolver.resolve("LC8ABC")
    with pytest.raises(UnknownDataTypeError):
        resolver.resolve(LEGACY_SCENE_ID, data_type="L1TP")
    with pytest.raises(UnknownDataTypeError):
        resolver.resolve(LEGACY_SCENE_ID, data_type="L9ZZ")


def test_folder_url(resolver, catalog):
    assert resolver.folder_url(LEGACY_SCENE_ID).endswith("/L8/006/052/LC80060522017107LGN00/")
    catalog.refresh()
    assert resolver.folder_url(C1_SCENE_ID) == C1_FOLDER
    with pytest.raises(InvalidIdentifierError):
        resolver.folder_url(SENTINEL_SCENE_ID)


def test_attach_bands(resolver):
    planet_scene = Scene("20170101_123456_0e0e", "2017-01-01T12:34:56Z")
    assert resolver.attach_bands(planet_scene) is planet_scene

    sentinel = resolver.attach_bands(Scene(SENTINEL_SCENE_ID, "2016-05-13T18:39:21Z"))
    assert sentinel.bands["red"].endswith("/tiles/11/S/KD/2016/5/13/0/B04.jp2")
