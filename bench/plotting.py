"""Charts: per-run variant timings and suite speedup by iteration count."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from bench.schemas import BenchmarkResult


def plot_result(result: BenchmarkResult, path: str) -> str:
    """Bar chart of mean elapsed time per variant, std over repeats as error bars."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    labels = [result.comparisons[0].baseline.label, result.comparisons[0].candidate.label]
    times = np.array([[c.baseline.elapsed_time, c.candidate.elapsed_time] for c in result.comparisons])
    fig, ax = plt.subplots(figsize=(5, 4))
    ax.bar(labels, times.mean(axis=0), yerr=times.std(axis=0), color=["#d62728", "#2ca02c"], capsize=4)
    ax.set_ylabel("elapsed time (s)")
    ax.set_title(f"{result.config.workload} x{result.config.iterations} ({result.runtime})")
    ax.grid(True, axis="y", ls=":")
    fig.savefig(path, format="png", dpi=100, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_speedup(df, path: str) -> str:
    """Line chart of mean_ratio vs iterations, one line per workload (and runtime if present)."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(7, 4))
    group_cols = ["workload", "runtime"] if "runtime" in df.columns and df["runtime"].nunique() > 1 else ["workload"]
    for key, grp in df.groupby(group_cols):
        grp = grp.sort_values("iterations")
        name = " / ".join(key) if isinstance(key, tuple) else str(key)
        ax.plot(grp["iterations"], grp["mean_ratio"], marker="o", label=name)
    ax.axhline(1.0, color="grey", ls="--", lw=1)
    ax.set_xscale("log")
    ax.set_xlabel("iterations")
    ax.set_ylabel("recompute / hoisted")
    ax.grid(True, ls=":")
    ax.legend()
    fig.savefig(path, format="png", dpi=100, bbox_inches="tight")
    plt.close(fig)
    return path
