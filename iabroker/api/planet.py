"""Planet API client with pagination and permission filtering."""
import logging
import time

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from iabroker.config import config
from iabroker.errors import PlanetAPIError
from iabroker.models.asset import Asset
from iabroker.models.scene import Scene
from iabroker.utils.geometry import bbox_to_geometry

logger = logging.getLogger(__name__)

ITEM_TYPE_ALIASES = {
    "REOrthoTile": "REOrthoTile",
    "rapideye": "REOrthoTile",
    "PSOrthoTile": "PSOrthoTile",
    "planetscope": "PSOrthoTile",
    "Landsat8L1G": "Landsat8L1G",
    "landsat": "Landsat8L1G",
    "Sentinel2L1C": "Sentinel2L1C",
    "sentinel": "Sentinel2L1C",
    "PSScene4Band": "PSScene4Band",
}

DOWNLOAD_PERMISSION = "assets.analytic:download"


def normalize_item_type(item_type):
    """
    Map a user-facing item type alias to the Planet item type.

    Raises:
        ValueError: Unknown item type
    """
    try:
        return ITEM_TYPE_ALIASES[item_type]
    except KeyError:
        raise ValueError(f"The item type value of {item_type} is invalid") from None


def feature_to_scene(feature):
    """
    Transform a Planet feature into a Scene.

    Planet reports cloud cover as a fraction; the broker uses percent.
    """
    props = feature.get("properties") or {}
    cloud_cover = props.get("cloud_cover")
    return Scene(
        scene_id=str(feature.get("id", "")),
        acquired=props.get("acquired") or "",
        cloud_cover=cloud_cover * 100.0 if isinstance(cloud_cover, (int, float)) else None,
        geometry=feature.get("geometry"),
        resolution=props.get("gsd"),
        sensor_name=props.get("satellite_id"),
    )


class PlanetAPIClient:
    """Client for the Planet Labs data API."""

    def __init__(self, api_key=None, base_url=None, disable_permissions_check=None):
        self.api_key = api_key or config.pl_api_key
        if not self.api_key:
            raise ValueError("Planet API key not configured")

        self.base_url = (base_url or config.planet_base_url).rstrip("/")
        if disable_permissions_check is None:
            disable_permissions_check = config.disable_permissions_check
        self.disable_permissions_check = disable_permissions_check
        self.session = requests.Session()
        self.session.auth = (self.api_key, "")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _send(self, method, url, **kwargs):
        kwargs.setdefault("timeout", config.api_timeout)
        return self.session.request(method, url, **kwargs)

    def _request(self, method, url, description, **kwargs):
        """Make HTTP request, turning error responses into PlanetAPIError."""
        logger.debug("%s %s", method, url)
        try:
            response = self._send(method, url, **kwargs)
        except requests.RequestException as e:
            raise PlanetAPIError(f"Failed to complete Planet Labs request: {e}") from e
        if response.status_code >= 400:
            raise PlanetAPIError(
                f"Failed to {description} from Planet Labs: {response.status_code} {response.reason}",
                status=response.status_code,
            )
        return response

    def _allowed(self, feature):
        if self.disable_permissions_check:
            return True
        return DOWNLOAD_PERMISSION in (feature.get("_permissions") or [])

    def search_scenes(self, item_type, bbox=None, acquired_date=None, max_acquired_date=None, cloud_cover=None):
        """
        Search for scenes with automatic pagination handling.

        Args:
            item_type: Item type or alias (e.g. 'landsat', 'sentinel')
            bbox: (west, south, east, north) tuple
            acquired_date: Earliest acquisition time (RFC 3339)
            max_acquired_date: Latest acquisition time (RFC 3339)
            cloud_cover: Maximum cloud cover in percent

        Returns:
            List of Scene records the key is permitted to download
        """
        item_type = normalize_item_type(item_type)
        filters = []
        if bbox is not None:
            filters.append(
                {"type": "GeometryFilter", "field_name": "geometry", "config": bbox_to_geometry(bbox)}
            )
        if acquired_date or max_acquired_date:
            date_config = {}
            if acquired_date:
                date_config["gte"] = acquired_date
            if max_acquired_date:
                date_config["lte"] = max_acquired_date
            filters.append({"type": "DateRangeFilter", "field_name": "acquired", "config": date_config})
        if cloud_cover:
            filters.append(
                {"type": "RangeFilter", "field_name": "cloud_cover", "config": {"lte": cloud_cover / 100.0}}
            )

        search_payload = {
            "item_types": [item_type],
            "filter": {"type": "AndFilter", "config": filters},
        }
        features = self._fetch_all_pages(f"{self.base_url}/data/v1/quick-search", search_payload)
        scenes = [feature_to_scene(f) for f in features if self._allowed(f)]
        logger.info("Found %d of %d %s scenes with download permission", len(scenes), len(features), item_type)
        return scenes

    def _fetch_all_pages(self, search_url, search_payload):
        """
        Fetch all pages of search results.

        Planet API uses pagination with _next link. Keep following until no more pages.
        """
        all_features = []
        response = self._request("POST", search_url, "discover scenes", json=search_payload)

        while True:
            data = response.json()
            all_features.extend(data.get("features", []))

            next_url = data.get("_links", {}).get("_next")
            if not next_url:
                break
            time.sleep(config.pagination_delay)
            response = self._request("GET", next_url, "discover scenes")

        return all_features

    def get_scene(self, item_type, scene_id):
        """
        Get metadata for a single scene.

        Args:
            item_type: Item type or alias
            scene_id: Planet item ID

        Returns:
            Scene
        """
        item_type = normalize_item_type(item_type)
        url = f"{self.base_url}/data/v1/item-types/{item_type}/items/{scene_id}"
        response = self._request("GET", url, f"find metadata for scene {scene_id}")
        try:
            feature = response.json()
        except ValueError as e:
            raise PlanetAPIError(
                "Planet Labs returned an unexpected response for this request", status=response.status_code
            ) from e
        return feature_to_scene(feature)

    def get_asset(self, item_type, scene_id):
        """
        Get the analytic asset of a scene.

        Args:
            item_type: Item type or alias
            scene_id: Planet item ID

        Returns:
            Asset (empty when the item has no analytic asset)
        """
        item_type = normalize_item_type(item_type)
        url = f"{self.base_url}/data/v1/item-types/{item_type}/items/{scene_id}/assets"
        response = self._request("GET", url, f"get asset information for scene {scene_id}")
        try:
            assets = response.json()
            if not isinstance(assets, dict):
                raise ValueError(f"expected an object, got {type(assets).__name__}")
        except ValueError as e:
            raise PlanetAPIError(
                "Planet Labs returned an unexpected response for this request", status=response.status_code
            ) from e
        return Asset.from_dict(assets.get("analytic") or {})

    def activate(self, item_type, scene_id):
        """
        Ask Planet to prepare the analytic asset of a scene for download.

        Returns:
            The asset as it was before activation

        Raises:
            PlanetAPIError: The asset cannot be activated or the request failed
        """
        asset = self.get_asset(item_type, scene_id)
        if not asset.activate_url:
            raise PlanetAPIError(f"Scene {scene_id} has no analytic asset to activate")
        self._request("POST", asset.activate_url, f"activate scene {scene_id}")
        logger.info("Requested activation of scene %s (status was %s)", scene_id, asset.status)
        return asset
