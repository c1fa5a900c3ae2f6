"""Utility functions."""

from iabroker.utils.dates import parse_acquired, to_tide_dtg, utc_now
from iabroker.utils.geometry import bbox_to_geometry, centroid, parse_bbox
from iabroker.utils.log import get_logger, setup_logging

__all__ = [
    "parse_acquired",
    "to_tide_dtg",
    "utc_now",
    "bbox_to_geometry",
    "centroid",
    "parse_bbox",
    "get_logger",
    "setup_logging",
]
