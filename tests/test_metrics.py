"""Tests for ratio, measurement validation and repeat statistics."""

import numpy as np
import pytest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bench.schemas import Measurement, ComparisonResult
from bench.metrics import compute_ratio, summarize, within_noise
from bench.runner import measure


def test_compute_ratio():
    a = Measurement("recompute", 3.0, 100)
    b = Measurement("hoisted", 1.5, 100)
    assert compute_ratio(a, b) == 2.0
    assert compute_ratio(b, a) == 0.5


def test_compute_ratio_zero_denominator():
    a = Measurement("recompute", 1.0, 1)
    b = Measurement("hoisted", 0.0, 1)
    with pytest.raises(ZeroDivisionError):
        compute_ratio(a, b)
    with pytest.raises(ZeroDivisionError):
        ComparisonResult(a, b).ratio


def test_measurement_validation():
    with pytest.raises(ValueError):
        Measurement("x", 1.0, 0)
    with pytest.raises(ValueError):
        Measurement("x", -0.1, 1)
    m = Measurement("x", 2.0, 4)
    assert m.per_call_s == 0.5


def test_measurement_is_immutable():
    m = Measurement("x", 1.0, 1)
    with pytest.raises(AttributeError):
        m.elapsed_time = 2.0


def test_comparison_faster_and_slower():
    c = ComparisonResult(Measurement("recompute", 4.0, 1), Measurement("hoisted", 1.0, 1))
    assert c.faster.label == "hoisted"
    assert c.slower.label == "recompute"
    assert c.speedup == 4.0


def test_within_noise():
    a = Measurement("x", 1.00, 1)
    assert within_noise(a, Measurement("x", 1.10, 1), rel_tol=0.2)
    assert not within_noise(a, Measurement("x", 2.0, 1), rel_tol=0.2, abs_tol=0.0)
    assert within_noise(Measurement("x", 0.001, 1), Measurement("x", 0.004, 1), abs_tol=0.01)


def test_summarize():
    comps = [
        ComparisonResult(Measurement("recompute", 2.0, 1), Measurement("hoisted", 1.0, 1)),
        ComparisonResult(Measurement("recompute", 4.0, 1), Measurement("hoisted", 1.0, 1)),
    ]
    s = summarize(comps)
    assert s["repeats"] == 2
    assert s["baseline_label"] == "recompute"
    assert s["baseline_s"]["mean"] == 3.0
    assert s["baseline_s"]["min"] == 2.0
    assert s["candidate_s"]["std"] == 0.0
    assert s["ratio"]["mean"] == 3.0
    assert s["ratio"]["max"] == 4.0


def test_summarize_zero_candidate_has_no_ratio():
    comps = [ComparisonResult(Measurement("recompute", 1.0, 1), Measurement("hoisted", 0.0, 1))]
    assert summarize(comps)["ratio"] is None
    assert summarize([]) == {"repeats": 0}


def test_numpy_clock_zero_candidate_still_raises():
    ticks = iter(np.array([0.0, 1.0, 5.0, 5.0]))
    clock = lambda: next(ticks)
    a = measure("recompute", lambda: None, 1, clock=clock)
    b = measure("hoisted", lambda: None, 1, clock=clock)
    assert type(a.elapsed_time) is float
    assert type(b.elapsed_time) is float
    c = ComparisonResult(a, b)
    with pytest.raises(ZeroDivisionError):
        c.ratio
    with pytest.raises(ZeroDivisionError):
        c.speedup
    with pytest.raises(ZeroDivisionError):
        compute_ratio(a, b)
