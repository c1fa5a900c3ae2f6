"""Per-band storage URLs for each naming convention."""
from iabroker.scenes.identifiers import IdentifierConvention

LANDSAT_BAND_HOST = "https://landsat-pds.s3.amazonaws.com"
SENTINEL_BAND_HOST = "http://sentinel-s2-l1c.s3.amazonaws.com"

BAND_NAMES = (
    "coastal",
    "blue",
    "green",
    "red",
    "nir",
    "swir1",
    "swir2",
    "panchromatic",
    "cirrus",
    "tirs1",
    "tirs2",
)

LANDSAT_BAND_SUFFIXES = {
    "coastal": "_B1.TIF",
    "blue": "_B2.TIF",
    "green": "_B3.TIF",
    "red": "_B4.TIF",
    "nir": "_B5.TIF",
    "swir1": "_B6.TIF",
    "swir2": "_B7.TIF",
    "panchromatic": "_B8.TIF",
    "cirrus": "_B9.TIF",
    "tirs1": "_B10.TIF",
    "tirs2": "_B11.TIF",
}

SENTINEL_BAND_FILENAMES = {
    "coastal": "B01.jp2",
    "blue": "B02.jp2",
    "green": "B03.jp2",
    "red": "B04.jp2",
    "nir": "B05.jp2",
    "swir1": "B06.jp2",
    "swir2": "B07.jp2",
    "panchromatic": "B08.jp2",
    "cirrus": "B09.jp2",
    "tirs1": "B10.jp2",
    "tirs2": "B11.jp2",
}


def legacy_folder_url(parsed, host=LANDSAT_BAND_HOST):
    """Folder holding a legacy Landsat scene's files."""
    scene_id = parsed.scene_id
    return f"{host.rstrip('/')}/L8/{parsed['path']}/{parsed['row']}/{scene_id}/"


def legacy_band_urls(parsed, host=LANDSAT_BAND_HOST):
    folder = legacy_folder_url(parsed, host)
    return {band: f"{folder}{parsed.scene_id}{LANDSAT_BAND_SUFFIXES[band]}" for band in BAND_NAMES}


def collection_one_band_urls(entry):
    return {band: entry.file_url(LANDSAT_BAND_SUFFIXES[band]) for band in BAND_NAMES}


def sentinel_folder_url(parsed, host=SENTINEL_BAND_HOST):
    """Tile folder holding a Sentinel-2 scene's band files."""
    # The bucket layout uses unpadded month and day, e.g. /2017/2/5/
    return "{host}/tiles/{zone}/{band}/{square}/{year}/{month}/{day}/0/".format(
        host=host.rstrip("/"),
        zone=parsed["utm_zone"],
        band=parsed["latitude_band"],
        square=parsed["grid_square"],
        year=int(parsed["year"]),
        month=int(parsed["month"]),
        day=int(parsed["day"]),
    )


def sentinel_band_urls(parsed, host=SENTINEL_BAND_HOST):
    folder = sentinel_folder_url(parsed, host)
    return {band: folder + SENTINEL_BAND_FILENAMES[band] for band in BAND_NAMES}


def compose_band_urls(
    parsed, catalog_entry=None, landsat_host=LANDSAT_BAND_HOST, sentinel_host=SENTINEL_BAND_HOST
):
    """
    Build the full band set for a parsed scene ID.

    Args:
        parsed: ParsedIdentifier from parse_identifier
        catalog_entry: CatalogEntry, required for Collection-1 scenes
        landsat_host: Host serving legacy Landsat scenes
        sentinel_host: Host serving Sentinel-2 tiles

    Returns:
        Dict of band name to URL with every name in BAND_NAMES

    Raises:
        ValueError: Collection-1 scene without a catalog entry, or an invalid ID
    """
    convention = parsed.convention
    if convention is IdentifierConvention.LEGACY_LANDSAT:
        return legacy_band_urls(parsed, landsat_host)
    if convention is IdentifierConvention.COLLECTION_ONE_LANDSAT:
        if catalog_entry is None:
            raise ValueError(f"Collection-1 scene {parsed.scene_id} requires a catalog entry")
        return collection_one_band_urls(catalog_entry)
    if convention is IdentifierConvention.SENTINEL2:
        return sentinel_band_urls(parsed, sentinel_host)
    raise ValueError(f"Cannot compose band URLs for {convention.value} scene {parsed.scene_id}")
