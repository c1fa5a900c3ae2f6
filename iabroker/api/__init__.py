"""API clients for external services."""

from iabroker.api.landsat import LandsatSceneListClient
from iabroker.api.planet import PlanetAPIClient
from iabroker.api.tides import TideClient

__all__ = ["LandsatSceneListClient", "PlanetAPIClient", "TideClient"]
