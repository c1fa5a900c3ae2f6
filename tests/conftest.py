"""
Test configuration and fixtures.

Scene lists are built in memory and served by a fake client, so no test
needs network access.
"""
import gzip
import io
import threading
from contextlib import contextmanager

import pytest

C1_SCENE_ID = "LC08_L1TP_012029_20170213_20170415_01_T1"
C1_PREFIX = "LC81490392017101LGN00"
C1_FOLDER = "https://s3-us-west-2.fakeamazonaws.dummy/thisiscorrect/"
MISSING_C1_SCENE_ID = "LC08_L1TP_012029_20180213_20170415_01_T1"
LEGACY_SCENE_ID = "LC80060522017107LGN00"
SENTINEL_SCENE_ID = "S2A_MSIL1C_20160513T183921_N0204_R070_T11SKD_20160513T185132"


def scene_list_row(prefix, scene_id, url):
    return (
        f"{prefix},{scene_id},2017-04-11 05:36:29.349932,0.0,L1TP,149,39,"
        f"29.22165,72.41205,31.34742,74.84666,{url}"
    )


def scene_list(*rows):
    return gzip.compress("\n".join(rows).encode("utf-8"))


class FakeSceneListClient:
    """Returns queued payloads (repeating the last one); exceptions are raised."""

    def __init__(self, responses, gate=None):
        self.responses = list(responses)
        self.gate = gate
        self.calls = 0
        self._lock = threading.Lock()

    @contextmanager
    def open_scene_list(self):
        with self._lock:
            self.calls += 1
            response = self.responses[min(self.calls, len(self.responses)) - 1]
        if self.gate is not None:
            self.gate.wait(5)
        if isinstance(response, Exception):
            raise response
        yield io.BytesIO(response)


@pytest.fixture
def sample_scene_list():
    """Scene list holding the single Collection-1 test scene."""
    return scene_list(scene_list_row(C1_PREFIX, C1_SCENE_ID, C1_FOLDER + "index.html"))


@pytest.fixture
def fake_client():
    """Factory for FakeSceneListClient instances."""
    return FakeSceneListClient


@pytest.fixture
def catalogs():
    """Create SceneCatalogs that are closed after the test."""
    from iabroker.storage.catalog import SceneCatalog

    created = []

    def make(client):
        catalog = SceneCatalog(client)
        created.append(catalog)
        return catalog

    yield make
    for catalog in created:
        catalog.close()
