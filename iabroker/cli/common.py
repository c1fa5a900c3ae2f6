"""Shared utilities for CLI commands."""
import json

import click
from rich.console import Console

from iabroker.config import config
from iabroker.api.planet import PlanetAPIClient
from iabroker.api.tides import TideClient
from iabroker.api.landsat import LandsatSceneListClient
from iabroker.models.scene import Scene
from iabroker.scenes.resolver import SceneResolver
from iabroker.storage.catalog import SceneCatalog
from iabroker.utils.geometry import parse_bbox

# Global console for consistent output
console = Console(soft_wrap=True)  # keep URLs on one line


def get_catalog(landsat_host=None):
    """Get an empty scene catalog pointed at the configured scene list."""
    url = f"{landsat_host.rstrip('/')}{config.scene_list_path}" if landsat_host else None
    return SceneCatalog(LandsatSceneListClient(scene_list_url=url))


def get_resolver(catalog):
    """Get a resolver using the configured band hosts."""
    return SceneResolver(
        catalog, landsat_host=config.landsat_band_host, sentinel_host=config.sentinel_band_host
    )


def get_planet_client(api_key=None):
    """Get initialized Planet API client."""
    return PlanetAPIClient(api_key or config.pl_api_key)


def get_tide_client():
    """Get initialized tide prediction client."""
    return TideClient()


def bbox_option(ctx, param, value):
    """click callback parsing --bbox."""
    if value is None:
        return None
    try:
        return parse_bbox(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def load_candidates(path):
    """
    Load candidate scenes from a GeoJSON FeatureCollection file.

    Returns:
        List of Scene
    """
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not hold a GeoJSON Feature or FeatureCollection")
    features = data.get("features", []) if data.get("type") == "FeatureCollection" else [data]
    if not isinstance(features, list) or not all(isinstance(feature, dict) for feature in features):
        raise ValueError(f"{path} holds features that are not GeoJSON objects")
    return [Scene.from_feature(feature) for feature in features]


def print_bands(bands):
    """Print band URLs in fixed band order."""
    for band, url in bands.items():
        console.print(f"  [bold]{band:<13}[/bold] {url}")


def print_scene(scene):
    """Print scene details in consistent format."""
    console.print(f"[bold]Scene:[/bold] {scene.scene_id}")
    console.print(f"  Acquired: {scene.acquired or 'N/A'}")
    if scene.cloud_cover is not None:
        console.print(f"  Cloud cover: {scene.cloud_cover:.1f}%")
    if scene.sensor_name:
        console.print(f"  Sensor: {scene.sensor_name}")
    if scene.has_tides:
        console.print(
            f"  Tide: {scene.current_tide:.2f} (24h range {scene.min_tide_24h:.2f} to {scene.max_tide_24h:.2f})"
        )


def print_asset(asset):
    """Print the download state of a scene's analytic asset."""
    props = asset.to_properties()
    if not props:
        console.print("  Asset: [dim]none[/dim]")
        return
    for key in ("type", "status", "expires_at", "location"):
        if key in props:
            console.print(f"  Asset {key}: {props[key]}")
    if "permissions" in props:
        console.print(f"  Asset permissions: {', '.join(props['permissions'])}")
