"""Benchmark runner: time the recompute and hoisted variants, report times and ratio."""

import json
import os
import platform
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Optional

from bench.schemas import BenchmarkConfig, BenchmarkResult, ComparisonResult, Measurement
from bench.metrics import summarize
from bench.logging_utils import run_log
from workloads.base import VariantPair
from workloads.generators import build_variants

# Monotonic time source in seconds. Tests pass a fake one.
Clock = Callable[[], float]


def measure(
    label: str,
    computation: Callable[[], Any],
    iterations: int,
    clock: Clock = time.perf_counter,
) -> Measurement:
    """Invoke `computation` `iterations` times back to back and time the whole loop.

    Exceptions raised by the computation propagate unchanged.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    t0 = clock()
    for _ in range(iterations):
        computation()
    t1 = clock()
    return Measurement(label=label, elapsed_time=t1 - t0, iteration_count=iterations)


def compare(pair: VariantPair, iterations: int, clock: Clock = time.perf_counter) -> ComparisonResult:
    # A then B, never interleaved.
    baseline = measure(pair.recompute.label, pair.recompute.computation, iterations, clock)
    candidate = measure(pair.hoisted.label, pair.hoisted.computation, iterations, clock)
    return ComparisonResult(baseline=baseline, candidate=candidate)


def run_benchmark(
    config: BenchmarkConfig,
    clock: Clock = time.perf_counter,
    run_id: Optional[str] = None,
) -> BenchmarkResult:
    if run_id is None:
        run_id = str(uuid.uuid4())[:8]
    if config.repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {config.repeats}")
    run_log("run_start", run_id=run_id, workload=config.workload, iterations=config.iterations,
            size=config.size, repeats=config.repeats, runtime=platform.python_implementation())
    pair = build_variants(config.workload, config.size, config.seed)

    comparisons: list[ComparisonResult] = []
    try:
        for i in range(config.repeats):
            c = compare(pair, config.iterations, clock)
            comparisons.append(c)
            run_log("repeat", run_id=run_id, repeat_index=i,
                    baseline_s=c.baseline.elapsed_time, candidate_s=c.candidate.elapsed_time)
    except Exception as e:
        run_log("run_failed", level="error", run_id=run_id, error=repr(e))
        raise

    result = BenchmarkResult(
        config=config,
        comparisons=comparisons,
        run_id=run_id,
        runtime=platform.python_implementation(),
        runtime_version=platform.python_version(),
        stats=summarize(comparisons),
    )
    ratio = (result.stats.get("ratio") or {}).get("mean")
    run_log("run_end", run_id=run_id, mean_ratio=ratio)
    return result


def format_report(comparison: ComparisonResult) -> list[str]:
    """Two `<label>: <seconds>s` lines and one `<faster> is faster than <slower>` line."""
    return [
        f"{comparison.baseline.label}: {comparison.baseline.elapsed_time:.2f}s",
        f"{comparison.candidate.label}: {comparison.candidate.elapsed_time:.2f}s",
        f"{comparison.faster.label} is faster than {comparison.slower.label} "
        f"by a factor of {comparison.speedup:.2f}",
    ]


def format_result(result: BenchmarkResult) -> list[str]:
    lines = []
    for c in result.comparisons:
        lines.extend(format_report(c))
    ratio = (result.stats or {}).get("ratio")
    if len(result.comparisons) > 1 and ratio:
        lines.append(
            f"mean ratio over {len(result.comparisons)} repeats: {ratio['mean']:.2f} "
            f"(min {ratio['min']:.2f}, max {ratio['max']:.2f})"
        )
    return lines


def _measurement_to_dict(m: Measurement) -> dict:
    return {"label": m.label, "elapsed_time": m.elapsed_time, "iteration_count": m.iteration_count}


def _measurement_from_dict(d: dict) -> Measurement:
    return Measurement(label=d["label"], elapsed_time=float(d["elapsed_time"]), iteration_count=int(d["iteration_count"]))


def result_to_dict(result: BenchmarkResult) -> dict:
    return {
        "run_id": result.run_id,
        "runtime": result.runtime,
        "runtime_version": result.runtime_version,
        "config": {
            "workload": result.config.workload,
            "iterations": result.config.iterations,
            "size": result.config.size,
            "repeats": result.config.repeats,
            "seed": result.config.seed,
        },
        "comparisons": [
            {"baseline": _measurement_to_dict(c.baseline), "candidate": _measurement_to_dict(c.candidate)}
            for c in result.comparisons
        ],
        "stats": result.stats,
    }


def result_from_dict(data: dict) -> BenchmarkResult:
    cfg = data.get("config", {})
    config = BenchmarkConfig(
        workload=cfg.get("workload", "len"),
        iterations=cfg.get("iterations", 1000),
        size=cfg.get("size", 1000),
        repeats=cfg.get("repeats", 1),
        seed=cfg.get("seed"),
    )
    comparisons = [
        ComparisonResult(baseline=_measurement_from_dict(c["baseline"]), candidate=_measurement_from_dict(c["candidate"]))
        for c in data.get("comparisons", [])
    ]
    return BenchmarkResult(
        config=config,
        comparisons=comparisons,
        run_id=data.get("run_id"),
        runtime=data.get("runtime", ""),
        runtime_version=data.get("runtime_version", ""),
        stats=data.get("stats"),
    )


def save_result(result: BenchmarkResult, out_dir: str = "data/runs") -> str:
    Path(out_dir).mkdir(parents=True, exist_ok=True)
    path = os.path.join(out_dir, f"run_{result.run_id}.json")
    with open(path, "w") as f:
        json.dump(result_to_dict(result), f, indent=2)
    return path


def load_result(path: str) -> BenchmarkResult:
    """Load a BenchmarkResult from JSON file."""
    with open(path) as f:
        return result_from_dict(json.load(f))


def result_to_dataframe(result: BenchmarkResult):
    import pandas as pd
    rows = []
    for i, c in enumerate(result.comparisons):
        for m in (c.baseline, c.candidate):
            rows.append({
                "run_id": result.run_id,
                "runtime": result.runtime,
                "workload": result.config.workload,
                "repeat": i,
                "label": m.label,
                "iterations": m.iteration_count,
                "elapsed_time": m.elapsed_time,
                "per_call_s": m.per_call_s,
            })
    return pd.DataFrame(rows)
