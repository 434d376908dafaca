"""Benchmark metrics: ratio, repeat statistics, noise check."""

import numpy as np

from bench.schemas import ComparisonResult, Measurement


def compute_ratio(a: Measurement, b: Measurement) -> float:
    """a.elapsed_time / b.elapsed_time.

    A zero denominator raises ZeroDivisionError; inf and NaN are never returned.
    """
    if b.elapsed_time == 0:
        raise ZeroDivisionError(f"cannot compute ratio: {b.label!r} elapsed_time is 0")
    return a.elapsed_time / b.elapsed_time


def within_noise(a: Measurement, b: Measurement, rel_tol: float = 0.5, abs_tol: float = 0.01) -> bool:
    """True if two timings of the same thing agree within timer/scheduler noise."""
    diff = abs(a.elapsed_time - b.elapsed_time)
    return diff <= max(abs_tol, rel_tol * max(a.elapsed_time, b.elapsed_time))


def _series_stats(values: list[float]) -> dict:
    arr = np.asarray(values, dtype=float)
    mean = float(arr.mean())
    std = float(arr.std())
    return {
        "mean": mean,
        "std": std,
        "min": float(arr.min()),
        "max": float(arr.max()),
        "cv": std / mean if mean > 0 else 0.0,
    }


def summarize(comparisons: list[ComparisonResult]) -> dict:
    if not comparisons:
        return {"repeats": 0}
    baseline = [c.baseline.elapsed_time for c in comparisons]
    candidate = [c.candidate.elapsed_time for c in comparisons]
    out = {
        "repeats": len(comparisons),
        "baseline_label": comparisons[0].baseline.label,
        "candidate_label": comparisons[0].candidate.label,
        "baseline_s": _series_stats(baseline),
        "candidate_s": _series_stats(candidate),
    }
    if all(t > 0 for t in candidate):
        out["ratio"] = _series_stats([compute_ratio(c.baseline, c.candidate) for c in comparisons])
    else:
        out["ratio"] = None
    return out
