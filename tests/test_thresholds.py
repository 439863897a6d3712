"""Tests for the minimum-threshold gate."""

import pytest

from preference_engine.gating import ThresholdGate, meets_minimum_thresholds
from preference_engine.profiles import MinimumThresholds

PASSING = {"physical": 0.7, "lifestyle": 0.7, "social": 0.7, "relationship": 0.7}


def test_overall_just_below_threshold_is_rejected():
    thresholds = MinimumThresholds(overall=0.6)
    assert not meets_minimum_thresholds(0.59, PASSING, thresholds)
    assert meets_minimum_thresholds(0.6, PASSING, thresholds)


def test_category_threshold_uses_raw_score():
    thresholds = MinimumThresholds(overall=0.0, social=0.5)
    scores = dict(PASSING, social=0.45)
    assert not meets_minimum_thresholds(0.9, scores, thresholds)


def test_undefined_category_thresholds_are_ignored():
    thresholds = MinimumThresholds(overall=0.0)
    scores = {"physical": 0.0, "lifestyle": 0.0, "social": 0.0, "relationship": 0.0}
    assert meets_minimum_thresholds(0.0, scores, thresholds)


def test_thresholds_clamped():
    assert meets_minimum_thresholds(1.0, PASSING, MinimumThresholds(overall=1.5))
    assert meets_minimum_thresholds(0.0, PASSING, MinimumThresholds(overall=-2.0))


def test_raising_overall_threshold_never_grows_the_set():
    items = [(f"c{s}", s / 20) for s in range(21)]
    previous = None
    for threshold in [0.0, 0.2, 0.4, 0.5, 0.6, 0.8, 1.0]:
        gate = ThresholdGate(MinimumThresholds(overall=threshold))
        kept = gate.apply(items, overall_of=lambda i: i[1], categories_of=lambda i: PASSING)
        if previous is not None:
            assert set(kept) <= set(previous)
        previous = kept


def test_gate_without_thresholds_uses_defaults():
    gate = ThresholdGate.from_thresholds(None)
    assert gate.thresholds.overall == 0.6
    assert not gate.passes(0.59, PASSING)
    assert gate.passes(0.6, PASSING)


def test_apply_keeps_input_order():
    gate = ThresholdGate.from_thresholds(MinimumThresholds(overall=0.5))
    items = [("b", 0.9), ("a", 0.2), ("c", 0.6)]
    kept = gate.apply(items, overall_of=lambda i: i[1], categories_of=lambda i: PASSING)
    assert [name for name, _ in kept] == ["b", "c"]


@pytest.mark.parametrize("value", [None, float("nan")])
def test_missing_category_threshold_is_none(value):
    thresholds = MinimumThresholds(overall=0.5, lifestyle=value).clamped()
    assert thresholds.lifestyle is None
