"""Scene identifier resolution and best-scene selection."""

from iabroker.scenes.bands import BAND_NAMES, compose_band_urls
from iabroker.scenes.identifiers import (
    IdentifierConvention,
    ParsedIdentifier,
    classify,
    parse_identifier,
)
from iabroker.scenes.resolver import ResolvedScene, SceneResolver
from iabroker.scenes.scoring import ScoredScene, rank_scenes, score_scene, select_best

__all__ = [
    "BAND_NAMES",
    "compose_band_urls",
    "IdentifierConvention",
    "ParsedIdentifier",
    "classify",
    "parse_identifier",
    "ResolvedScene",
    "SceneResolver",
    "ScoredScene",
    "rank_scenes",
    "score_scene",
    "select_best",
]
