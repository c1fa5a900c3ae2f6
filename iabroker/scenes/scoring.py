"""Best-scene ranking by cloud cover, age and tidal state."""
import logging
import math
from dataclasses import dataclass

from iabroker.models.scene import Scene
from iabroker.utils.dates import EPOCH_2015, TEN_YEARS_SECONDS, utc_now

logger = logging.getLogger(__name__)

TIDE_PENALTY = math.sqrt(0.1)


@dataclass(frozen=True)
class ScoredScene:
    """A candidate scene and its score for one ranking request."""

    scene: Scene
    score: float

    @property
    def scene_id(self):
        return self.scene.scene_id


def tide_penalty(scene):
    """
    Penalty favouring scenes captured near high tide.

    Missing or degenerate tide data is treated as low tide.
    """
    if not scene.has_tides:
        return TIDE_PENALTY
    tide_range = scene.max_tide_24h - scene.min_tide_24h
    if tide_range == 0:
        return TIDE_PENALTY
    penalty = TIDE_PENALTY * (scene.max_tide_24h - scene.current_tide) / tide_range
    return penalty if math.isfinite(penalty) else TIDE_PENALTY


def score_scene(scene, now=None):
    """
    Score a scene; higher is better.

    Args:
        scene: Scene with cloud cover, acquisition date and optional tides
        now: Reference time (defaults to the current UTC time)

    Returns:
        Score as a float, exactly 0.0 when the acquisition date does not parse
    """
    acquired = scene.acquired_date
    if acquired is None:
        logger.info("Received invalid date of %r for scene %s", scene.acquired, scene.scene_id)
        return 0.0

    now = now or utc_now()

    # Older scenes are unlikely to be in the archive unless they have very good cloud cover
    result = 0.5 if acquired < EPOCH_2015 else 1.0

    cloud_cover = scene.cloud_cover
    if cloud_cover is None or not math.isfinite(cloud_cover) or cloud_cover < 0:
        cloud_cover = 100.0
    result -= math.sqrt(cloud_cover / 100.0)
    result -= (acquired.timestamp() - now.timestamp()) / TEN_YEARS_SECONDS
    result -= tide_penalty(scene)
    return result


def rank_scenes(candidates, now=None):
    """
    Score every candidate.

    Returns:
        List of ScoredScene, best first; equal scores keep input order
    """
    now = now or utc_now()
    scored = [ScoredScene(scene, score_scene(scene, now)) for scene in candidates]
    return sorted(scored, key=lambda s: -_comparable(s.score))


def select_best(candidates, now=None):
    """
    ID of the highest scoring candidate, the first one on ties.

    Returns:
        Scene ID or None for an empty candidate set
    """
    now = now or utc_now()
    best = None
    best_score = None
    for scene in candidates:
        current = _comparable(score_scene(scene, now))
        if best is None or current > best_score:
            best, best_score = scene, current
    return best.scene_id if best is not None else None


def _comparable(score):
    # NaN ranks below every real score
    return score if not math.isnan(score) else -math.inf
