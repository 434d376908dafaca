"""Loop-invariant hoisting benchmark: runner, metrics, artifacts."""

from bench.schemas import BenchmarkConfig, BenchmarkResult, ComparisonResult, Measurement
from bench.runner import measure, compare, run_benchmark, format_report
from bench.metrics import compute_ratio, summarize

__all__ = [
    "BenchmarkConfig",
    "BenchmarkResult",
    "ComparisonResult",
    "Measurement",
    "measure",
    "compare",
    "run_benchmark",
    "format_report",
    "compute_ratio",
    "summarize",
]
