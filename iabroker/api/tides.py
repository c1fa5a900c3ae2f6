"""Client for the tide prediction service."""
import logging

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from iabroker.config import config
from iabroker.errors import TideServiceError
from iabroker.utils.dates import to_tide_dtg
from iabroker.utils.geometry import centroid

logger = logging.getLogger(__name__)


def tide_location(scene):
    """
    Request body entry for a scene.

    Returns:
        {"lat", "lon", "dtg"} dict, or None when the scene has no usable
        footprint or acquisition date
    """
    acquired = scene.acquired_date
    center = centroid(scene.geometry)
    if acquired is None or center is None:
        return None
    lon, lat = center
    return {"lat": lat, "lon": lon, "dtg": to_tide_dtg(acquired)}


class TideClient:
    """Adds current and 24 hour min/max tide predictions to scenes."""

    def __init__(self, tides_url=None, timeout=None, session=None):
        self.tides_url = tides_url or config.tides_url
        self.timeout = timeout or config.api_timeout
        self.session = session or requests.Session()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _post(self, body):
        return self.session.post(self.tides_url, json=body, timeout=self.timeout)

    def enrich(self, scenes):
        """
        Attach tide predictions to scenes.

        Args:
            scenes: List of Scene

        Returns:
            New list of Scene in the same order; scenes without a footprint or
            a parseable acquisition date are returned unchanged

        Raises:
            TideServiceError: The service could not be reached or answered badly
        """
        scenes = list(scenes)
        pending = {}
        by_dtg = {}
        locations = []
        for index, scene in enumerate(scenes):
            location = tide_location(scene)
            if location is None:
                logger.info("Could not get tide information for scene %s: missing footprint or date", scene.scene_id)
                continue
            pending.setdefault(_location_key(location), []).append(index)
            by_dtg.setdefault(location["dtg"], []).append(index)
            locations.append(location)

        if not locations:
            return scenes

        try:
            response = self._post({"locations": locations})
            response.raise_for_status()
            results = response.json().get("locations", [])
        except (requests.RequestException, ValueError, AttributeError) as e:
            raise TideServiceError(f"Failed to retrieve tides: {e}") from e

        matched = set()
        for result in results:
            if not isinstance(result, dict):
                logger.info("Ignoring malformed tide result %r", result)
                continue
            indexes = pending.get(_location_key(result))
            if not indexes:
                # Coordinates may come back at another precision; the time still identifies the request
                indexes = [i for i in by_dtg.get(str(result.get("dtg")), []) if i not in matched]
            if not indexes:
                logger.info("Failed to find scene for tide location %s", result.get("dtg"))
                continue
            tides = result.get("results") or {}
            matched.update(indexes)
            for index in indexes:
                scenes[index] = scenes[index].with_tides(
                    tides.get("currentTide"),
                    tides.get("minimumTide24Hours"),
                    tides.get("maximumTide24Hours"),
                )
        return scenes


def _location_key(location):
    try:
        return (round(float(location["lat"]), 6), round(float(location["lon"]), 6), location["dtg"])
    except (KeyError, TypeError, ValueError):
        return None
