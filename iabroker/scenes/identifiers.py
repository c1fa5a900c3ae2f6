"""
Scene identifier classification.

Three naming conventions are understood:

* legacy Landsat-8 IDs such as ``LC80060522017107LGN00``, which carry their
  WRS path and row and can be resolved without any lookup;
* Collection-1 Landsat IDs such as ``LC08_L1TP_012029_20170213_20170415_01_T1``,
  whose storage folder must be looked up in the scene catalog;
* Sentinel-2 L1C product IDs such as
  ``S2A_MSIL1C_20160513T183921_N0204_R070_T11SKD_20160513T185132``, which
  carry the acquisition date and MGRS tile.

Reference https://landsat.usgs.gov/landsat-collections and
https://earth.esa.int/web/sentinel/user-guides/sentinel-2-msi/naming-convention
"""
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from iabroker.errors import (
    InvalidIdentifierError,
    MalformedIdentifierError,
    UnknownDataTypeError,
)

PRE_COLLECTION_DATA_TYPES = frozenset({"L1T", "L1GT", "L1G"})
COLLECTION_ONE_DATA_TYPES = frozenset({"L1TP", "L1GT", "L1GS"})


class IdentifierConvention(Enum):
    """Naming convention a scene ID belongs to."""

    LEGACY_LANDSAT = "legacy-landsat"
    COLLECTION_ONE_LANDSAT = "collection-1-landsat"
    SENTINEL2 = "sentinel-2"
    INVALID = "invalid"

    @property
    def label(self):
        return _LABELS[self]

    @property
    def is_landsat(self):
        return self in (IdentifierConvention.LEGACY_LANDSAT, IdentifierConvention.COLLECTION_ONE_LANDSAT)


_LABELS = {
    IdentifierConvention.LEGACY_LANDSAT: "Landsat",
    IdentifierConvention.COLLECTION_ONE_LANDSAT: "Landsat Collection-1",
    IdentifierConvention.SENTINEL2: "Sentinel-2",
    IdentifierConvention.INVALID: "invalid",
}

# Order matters only for readability; the prefixes are disjoint.
_PREFIXES = (
    (IdentifierConvention.LEGACY_LANDSAT, re.compile(r"LC8")),
    (IdentifierConvention.COLLECTION_ONE_LANDSAT, re.compile(r"L[COTEM]0[0-9]_")),
    (IdentifierConvention.SENTINEL2, re.compile(r"S2[AB]")),
)

_PATTERNS = {
    IdentifierConvention.LEGACY_LANDSAT: re.compile(
        r"LC8(?P<path>[0-9]{3})(?P<row>[0-9]{3})"
        r"(?P<year>[0-9]{4})(?P<day_of_year>[0-9]{3})"
        r"(?P<station>[A-Z]{3})(?P<version>[0-9]{2})"
    ),
    IdentifierConvention.COLLECTION_ONE_LANDSAT: re.compile(
        r"L(?P<sensor>[COTEM])(?P<mission>0[0-9])_(?P<data_type>[A-Z0-9]{3,4})_"
        r"(?P<path>[0-9]{3})(?P<row>[0-9]{3})_(?P<acquired>[0-9]{8})_"
        r"(?P<processed>[0-9]{8})_(?P<collection>[0-9]{2})_(?P<category>RT|T1|T2)"
    ),
    IdentifierConvention.SENTINEL2: re.compile(
        r"S2(?P<satellite>[AB])_MSIL1C_"
        r"(?P<year>[0-9]{4})(?P<month>[0-9]{2})(?P<day>[0-9]{2})T[0-9]{6}_"
        r"N[0-9]{4}_R[0-9]{3}_"
        r"T(?P<utm_zone>[0-9]{1,2})(?P<latitude_band>[A-Z])(?P<grid_square>[A-Z]{2})_"
        r"[0-9]{8}T[0-9]{6}"
    ),
}


@dataclass(frozen=True)
class ParsedIdentifier:
    """A scene ID together with its convention and the fields extracted from it."""

    scene_id: str
    convention: IdentifierConvention
    fields: Mapping[str, str]

    def __getitem__(self, name):
        return self.fields[name]


def recognized_convention(scene_id):
    """
    Convention implied by the ID's prefix alone.

    Returns:
        IdentifierConvention or None when no known prefix matches
    """
    if not isinstance(scene_id, str):
        return None
    for convention, prefix in _PREFIXES:
        if prefix.match(scene_id):
            return convention
    return None


def parse_identifier(scene_id):
    """
    Classify a scene ID and extract its fields.

    Args:
        scene_id: Scene identifier string

    Returns:
        ParsedIdentifier

    Raises:
        InvalidIdentifierError: No known prefix
        MalformedIdentifierError: Known prefix but the full pattern does not match
        UnknownDataTypeError: Collection-1 ID with an unrecognized processing level
    """
    convention = recognized_convention(scene_id)
    if convention is None:
        raise InvalidIdentifierError(scene_id)

    match = _PATTERNS[convention].fullmatch(scene_id)
    if match is None:
        raise MalformedIdentifierError(scene_id, convention)

    fields = match.groupdict()
    if (
        convention is IdentifierConvention.COLLECTION_ONE_LANDSAT
        and fields["data_type"] not in COLLECTION_ONE_DATA_TYPES
    ):
        raise UnknownDataTypeError(scene_id, fields["data_type"])

    return ParsedIdentifier(scene_id, convention, MappingProxyType(fields))


def classify(scene_id):
    """Classify a scene ID; never raises, returning INVALID for anything unusable."""
    try:
        return parse_identifier(scene_id).convention
    except (InvalidIdentifierError, MalformedIdentifierError, UnknownDataTypeError):
        return IdentifierConvention.INVALID


def check_data_type(parsed, data_type):
    """
    Validate a Landsat data-type qualifier against the ID's convention.

    Args:
        parsed: ParsedIdentifier
        data_type: Qualifier such as L1T or L1TP, or None

    Raises:
        UnknownDataTypeError: Qualifier outside the vocabulary of the convention
    """
    if data_type is None:
        return
    if parsed.convention is IdentifierConvention.LEGACY_LANDSAT:
        allowed = PRE_COLLECTION_DATA_TYPES
    elif parsed.convention is IdentifierConvention.COLLECTION_ONE_LANDSAT:
        allowed = COLLECTION_ONE_DATA_TYPES
    else:
        allowed = frozenset()
    if data_type.upper() not in allowed:
        raise UnknownDataTypeError(parsed.scene_id, data_type)
