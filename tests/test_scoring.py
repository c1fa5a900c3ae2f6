"""Tests for best-scene scoring."""
import math
from datetime import datetime, timezone

import pytest

from iabroker.models.scene import Scene
from iabroker.scenes.scoring import TIDE_PENALTY, rank_scenes, score_scene, select_best, tide_penalty

NOW = datetime(2017, 6, 1, tzinfo=timezone.utc)
RECENT = "2017-06-01T00:00:00Z"


def make_scene(scene_id="scene", acquired=RECENT, cloud_cover=0.0, tides=None):
    scene = Scene(scene_id, acquired, cloud_cover=cloud_cover)
    if tides:
        scene = scene.with_tides(*tides)
    return scene


@pytest.mark.parametrize("acquired", ["not a date", "", "2017-13-45T00:00:00Z"])
def test_unparseable_date_scores_zero(acquired):
    assert score_scene(make_scene(acquired=acquired, cloud_cover=5.0), NOW) == 0.0


def test_exact_score():
    scene = make_scene(cloud_cover=25.0, tides=(1.0, 0.0, 2.0))
    expected = 1.0 - 0.5 - 0.0 - TIDE_PENALTY * 0.5
    assert score_scene(scene, NOW) == pytest.approx(expected)


def test_lower_cloud_cover_scores_higher():
    clear = make_scene(cloud_cover=10.0)
    cloudy = make_scene(cloud_cover=11.0)
    assert score_scene(clear, NOW) > score_scene(cloudy, NOW)


def test_missing_tides_and_low_tide_have_same_penalty():
    missing = make_scene()
    low_tide = make_scene(tides=(0.5, 0.5, 3.0))

    assert tide_penalty(missing) == pytest.approx(math.sqrt(0.1))
    assert tide_penalty(low_tide) == pytest.approx(math.sqrt(0.1))
    assert score_scene(missing, NOW) == pytest.approx(score_scene(low_tide, NOW))


def test_high_tide_has_no_penalty():
    assert tide_penalty(make_scene(tides=(3.0, 0.5, 3.0))) == 0.0


def test_partial_or_flat_tides_fall_back_to_low_tide():
    partial = Scene("s", RECENT, cloud_cover=0.0, current_tide=1.0)
    flat = make_scene(tides=(1.0, 1.0, 1.0))
    assert tide_penalty(partial) == TIDE_PENALTY
    assert tide_penalty(flat) == TIDE_PENALTY


def test_pre_2015_scenes_start_from_half():
    before = make_scene(acquired="2014-12-31T23:59:59Z")
    after = make_scene(acquired="2015-01-01T00:00:00Z")
    assert score_scene(after, NOW) - score_scene(before, NOW) == pytest.approx(0.5, abs=1e-6)


def test_age_term_is_acquired_minus_now_in_decades():
    scene = make_scene(acquired="2016-06-01T00:00:00Z", cloud_cover=10.0)
    expected = 1.0 - math.sqrt(0.1) - (-365.0 / 3650.0) - TIDE_PENALTY
    assert score_scene(scene, NOW) == pytest.approx(expected)


def test_age_term_difference_between_scenes():
    newer = make_scene(acquired="2017-05-01T00:00:00Z")
    older = make_scene(acquired="2016-05-01T00:00:00Z")
    difference = score_scene(older, NOW) - score_scene(newer, NOW)
    assert difference == pytest.approx(0.1, abs=1e-3)


def test_missing_cloud_cover_is_treated_as_overcast():
    scene = make_scene(cloud_cover=None)
    assert score_scene(scene, NOW) == pytest.approx(1.0 - 1.0 - TIDE_PENALTY)


def test_naive_timestamps_are_utc():
    assert score_scene(make_scene(acquired="2017-06-01T00:00:00"), NOW) == pytest.approx(
        score_scene(make_scene(), NOW)
    )


def test_select_best_prefers_least_cloud():
    candidates = [
        make_scene("cloudy", cloud_cover=50.0),
        make_scene("clear", cloud_cover=5.0),
        make_scene("overcast", cloud_cover=90.0),
    ]
    assert select_best(candidates, NOW) == "clear"


def test_select_best_ties_go_to_first():
    candidates = [make_scene("first"), make_scene("second"), make_scene("third")]
    assert select_best(candidates, NOW) == "first"


def test_select_best_with_bad_dates():
    candidates = [make_scene("broken", acquired="yesterday"), make_scene("good", cloud_cover=5.0)]
    assert select_best(candidates, NOW) == "good"


def test_select_best_empty():
    assert select_best([], NOW) is None


def test_rank_scenes_orders_best_first():
    candidates = [
        make_scene("cloudy", cloud_cover=50.0),
        make_scene("clear", cloud_cover=5.0),
        make_scene("also-cloudy", cloud_cover=50.0),
    ]
    ranked = rank_scenes(candidates, NOW)
    assert [r.scene_id for r in ranked] == ["clear", "cloudy", "also-cloudy"]
    assert ranked[0].score > ranked[1].score


def test_select_best_skips_nan_cloud_cover():
    candidates = [make_scene("nan", cloud_cover=float("nan")), make_scene("good", cloud_cover=0.0)]
    assert select_best(candidates, NOW) == "good"


def test_nan_scores_rank_last():
    nan_tides = make_scene("nan-tides", cloud_cover=0.0).with_tides(float("nan"), 0.0, 1.0)
    candidates = [make_scene("cloudy", cloud_cover=50.0), nan_tides]

    assert tide_penalty(nan_tides) == TIDE_PENALTY
    ranked = rank_scenes(candidates, NOW)
    assert all(not math.isnan(r.score) for r in ranked)
    assert [r.scene_id for r in ranked] == ["nan-tides", "cloudy"]


def test_nan_score_never_wins(monkeypatch):
    scores = {"first": float("nan"), "second": -5.0}
    monkeypatch.setattr("iabroker.scenes.scoring.score_scene", lambda scene, now=None: scores[scene.scene_id])
    candidates = [make_scene("first"), make_scene("second")]

    assert select_best(candidates, NOW) == "second"
    assert [r.scene_id for r in rank_scenes(candidates, NOW)] == ["second", "first"]
