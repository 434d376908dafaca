"""Write per-run artifacts: manifest.json, measurements.jsonl, metrics.json, summary.csv, chart.png."""

import json
import os
from pathlib import Path

from bench.schemas import BenchmarkResult
from bench.experiment_config import RunManifest, stable_config_hash
from bench.runner import result_to_dataframe
from bench.plotting import plot_result


def _mean(stats: dict, key: str):
    block = stats.get(key) or {}
    return block.get("mean")


def write_run_artifacts(result: BenchmarkResult, run_dir: str, chart: bool = True) -> dict:
    """Write all artifacts for one run under run_dir. Returns artifact paths."""
    Path(run_dir).mkdir(parents=True, exist_ok=True)
    run_id = result.run_id or "unknown"
    config = result.config
    stats = result.stats or {}

    config_dict = {
        "workload": config.workload,
        "iterations": config.iterations,
        "size": config.size,
        "repeats": config.repeats,
        "seed": config.seed,
    }
    manifest = RunManifest(
        run_id=run_id,
        config_hash=stable_config_hash(config_dict),
        config=config_dict,
        workload=config.workload,
        runtime=result.runtime,
        runtime_version=result.runtime_version,
        repeats=len(result.comparisons),
        baseline_mean_s=_mean(stats, "baseline_s"),
        candidate_mean_s=_mean(stats, "candidate_s"),
        mean_ratio=_mean(stats, "ratio"),
    )
    manifest_path = os.path.join(run_dir, "manifest.json")
    manifest.artifacts["manifest"] = manifest_path

    # measurements.jsonl (one line per measurement, in the order taken)
    measurements_path = os.path.join(run_dir, "measurements.jsonl")
    with open(measurements_path, "w") as f:
        for idx, c in enumerate(result.comparisons):
            for m in (c.baseline, c.candidate):
                f.write(json.dumps({
                    "repeat": idx,
                    "label": m.label,
                    "elapsed_time": m.elapsed_time,
                    "iteration_count": m.iteration_count,
                }) + "\n")
    manifest.artifacts["measurements"] = measurements_path

    metrics_path = os.path.join(run_dir, "metrics.json")
    with open(metrics_path, "w") as f:
        json.dump(stats, f, indent=2)
    manifest.artifacts["metrics"] = metrics_path

    summary_csv = os.path.join(run_dir, "summary.csv")
    result_to_dataframe(result).to_csv(summary_csv, index=False)
    manifest.artifacts["summary_csv"] = summary_csv

    if chart and result.comparisons:
        manifest.artifacts["chart"] = plot_result(result, os.path.join(run_dir, "chart.png"))

    run_log_path = os.path.join(run_dir, "run.log")
    if os.path.exists(run_log_path):
        manifest.artifacts["run_log"] = run_log_path

    with open(manifest_path, "w") as f:
        f.write(manifest.model_dump_json(indent=2))

    return dict(manifest.artifacts)
