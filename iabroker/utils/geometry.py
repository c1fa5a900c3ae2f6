"""Geometry utilities for scene footprints."""
from shapely.geometry import box, shape


def parse_bbox(bbox_str):
    """
    Parse a comma separated bounding box.

    Args:
        bbox_str: "west,south,east,north"

    Returns:
        Tuple of four floats

    Raises:
        ValueError: If the string is not four numbers or is inverted
    """
    parts = [p.strip() for p in bbox_str.split(",")]
    if len(parts) != 4:
        raise ValueError(f"Expected 4 comma separated values in bbox, got {len(parts)}")
    west, south, east, north = (float(p) for p in parts)
    if west > east or south > north:
        raise ValueError(f"Bounding box {bbox_str} is inverted")
    return west, south, east, north


def bbox_to_geometry(bbox):
    """Convert a (west, south, east, north) tuple to a GeoJSON polygon."""
    return box(*bbox).__geo_interface__


def centroid(geometry):
    """
    Centroid of a GeoJSON geometry.

    Args:
        geometry: GeoJSON geometry dict

    Returns:
        (lon, lat) tuple or None if the geometry is missing or empty
    """
    if not geometry:
        return None
    geom = shape(geometry)
    if geom.is_empty:
        return None
    point = geom.centroid
    return point.x, point.y
