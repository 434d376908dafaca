"""Suite runner: workloads x iteration counts, aggregated CSV, manifest and speedup chart."""

import hashlib
import json
import os
import uuid
from pathlib import Path

from bench.schemas import BenchmarkConfig, BenchmarkResult, SuiteRunConfig, SuiteRunResult
from bench.runner import run_benchmark, save_result
from bench.experiment_config import stable_config_hash
from bench.artifacts import write_run_artifacts
from bench.plotting import plot_speedup
from bench.logging_utils import set_run_log_path, clear_run_log_path, run_log


def _config_hash(config: BenchmarkConfig) -> str:
    return stable_config_hash({
        "workload": config.workload,
        "iterations": config.iterations,
        "size": config.size,
        "repeats": config.repeats,
        "seed": config.seed,
    })


def suite_to_dataframe(results: list[BenchmarkResult]):
    import pandas as pd
    rows = []
    for r in results:
        stats = r.stats or {}
        ratio = stats.get("ratio") or {}
        rows.append({
            "run_id": r.run_id,
            "config_hash": _config_hash(r.config),
            "runtime": r.runtime,
            "workload": r.config.workload,
            "iterations": r.config.iterations,
            "size": r.config.size,
            "repeats": len(r.comparisons),
            "baseline_mean_s": (stats.get("baseline_s") or {}).get("mean"),
            "candidate_mean_s": (stats.get("candidate_s") or {}).get("mean"),
            "mean_ratio": ratio.get("mean"),
            "ratio_cv": ratio.get("cv"),
        })
    return pd.DataFrame(rows)


def run_suite(suite_config: SuiteRunConfig, out_dir: str = "data/runs", chart: bool = True) -> SuiteRunResult:
    """Run every workload at every iteration count, sequentially."""
    Path(out_dir).mkdir(parents=True, exist_ok=True)
    results: list[BenchmarkResult] = []
    for workload in suite_config.workloads:
        for iterations in suite_config.iteration_counts:
            config = BenchmarkConfig(
                workload=workload,
                iterations=iterations,
                size=suite_config.size,
                repeats=suite_config.repeats,
                seed=suite_config.seed,
            )
            run_id = str(uuid.uuid4())[:8]
            run_dir = Path(out_dir) / "runs" / run_id
            set_run_log_path(str(run_dir / "run.log"))
            try:
                result = run_benchmark(config, run_id=run_id)
                save_result(result, out_dir)
                write_run_artifacts(result, str(run_dir), chart=chart)
            finally:
                clear_run_log_path()
            results.append(result)

    run_id = str(uuid.uuid4())[:8]
    config_hash = hashlib.sha256(json.dumps({
        "workloads": suite_config.workloads,
        "iteration_counts": suite_config.iteration_counts,
        "size": suite_config.size,
        "repeats": suite_config.repeats,
        "seed": suite_config.seed,
    }, sort_keys=True).encode()).hexdigest()[:16]

    df = suite_to_dataframe(results)
    csv_path = os.path.join(out_dir, f"suite_{run_id}_aggregated.csv")
    df.to_csv(csv_path, index=False)

    chart_path = None
    if chart and not df.empty and df["mean_ratio"].notna().any():
        chart_path = plot_speedup(df.dropna(subset=["mean_ratio"]), os.path.join(out_dir, f"suite_{run_id}_speedup.png"))

    manifest = {
        "suite_run_id": run_id,
        "config_hash": config_hash,
        "n_runs": len(results),
        "workloads": suite_config.workloads,
        "iteration_counts": suite_config.iteration_counts,
        "size": suite_config.size,
        "repeats": suite_config.repeats,
        "aggregated_csv": csv_path,
        "chart": chart_path,
    }
    manifest_path = os.path.join(out_dir, f"suite_{run_id}_manifest.json")
    with open(manifest_path, "w") as f:
        json.dump(manifest, f, indent=2)
    run_log("suite_end", run_id=run_id, n_runs=len(results), manifest=manifest_path)

    return SuiteRunResult(
        run_id=run_id,
        config_hash=config_hash,
        results=results,
        aggregated_csv_path=csv_path,
        manifest_path=manifest_path,
        chart_path=chart_path,
    )

