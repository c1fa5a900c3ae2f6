"""Data models for scenes."""
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from iabroker.utils.dates import parse_acquired

CURRENT_TIDE = "CurrentTide"
MIN_TIDE = "MinimumTide24Hours"
MAX_TIDE = "MaximumTide24Hours"


@dataclass
class Scene:
    """A single acquisition as seen by the broker."""

    scene_id: str
    acquired: str  # RFC 3339, kept raw so unparseable values survive to scoring
    cloud_cover: Optional[float] = None  # percent
    geometry: Optional[dict] = None  # GeoJSON geometry
    resolution: Optional[float] = None
    sensor_name: Optional[str] = None
    current_tide: Optional[float] = None
    min_tide_24h: Optional[float] = None
    max_tide_24h: Optional[float] = None
    bands: Dict[str, str] = field(default_factory=dict)

    @property
    def acquired_date(self):
        """Parsed acquisition time, or None if it does not parse."""
        return parse_acquired(self.acquired)

    @property
    def has_tides(self):
        return None not in (self.current_tide, self.min_tide_24h, self.max_tide_24h)

    def with_tides(self, current, minimum, maximum):
        """Copy of this scene carrying tide predictions."""
        return replace(self, current_tide=current, min_tide_24h=minimum, max_tide_24h=maximum)

    def with_bands(self, bands):
        """Copy of this scene carrying band URLs."""
        return replace(self, bands=dict(bands))

    @classmethod
    def from_feature(cls, feature):
        """
        Create a Scene from a broker GeoJSON feature.

        Args:
            feature: GeoJSON Feature dict with an id and broker properties

        Returns:
            Scene
        """
        props = feature.get("properties") or {}
        scene_id = feature.get("id") or props.get("id")
        if not scene_id:
            raise ValueError("Feature has no scene ID")
        return cls(
            scene_id=str(scene_id),
            acquired=props.get("acquiredDate") or "",
            cloud_cover=_optional_float(props.get("cloudCover")),
            geometry=feature.get("geometry"),
            resolution=_optional_float(props.get("resolution")),
            sensor_name=props.get("sensorName"),
            current_tide=_optional_float(props.get(CURRENT_TIDE)),
            min_tide_24h=_optional_float(props.get(MIN_TIDE)),
            max_tide_24h=_optional_float(props.get(MAX_TIDE)),
            bands=dict(props.get("bands") or {}),
        )

    def to_feature(self):
        """Convert to a GeoJSON Feature dict."""
        props = {
            "acquiredDate": self.acquired,
            "cloudCover": self.cloud_cover if self.cloud_cover is not None else -1.0,
            "fileFormat": "geotiff",
        }
        if self.resolution is not None:
            props["resolution"] = self.resolution
        if self.sensor_name:
            props["sensorName"] = self.sensor_name
        if self.has_tides:
            props[CURRENT_TIDE] = self.current_tide
            props[MIN_TIDE] = self.min_tide_24h
            props[MAX_TIDE] = self.max_tide_24h
        if self.bands:
            props["bands"] = dict(self.bands)
        return {
            "type": "Feature",
            "id": self.scene_id,
            "geometry": self.geometry,
            "properties": props,
        }


def _optional_float(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None
