"""Schemas for benchmark config, measurements and results."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Measurement:
    label: str
    elapsed_time: float  # seconds
    iteration_count: int

    def __post_init__(self):
        if self.iteration_count < 1:
            raise ValueError(f"iteration_count must be >= 1, got {self.iteration_count}")
        if self.elapsed_time < 0:
            raise ValueError(f"elapsed_time must be >= 0, got {self.elapsed_time}")
        # Clocks may hand back numpy scalars, which divide by zero to inf.
        object.__setattr__(self, "elapsed_time", float(self.elapsed_time))

    @property
    def per_call_s(self) -> float:
        return self.elapsed_time / self.iteration_count


@dataclass(frozen=True)
class ComparisonResult:
    """Baseline (recompute) and candidate (hoisted) measurements of one A/B pair."""

    baseline: Measurement
    candidate: Measurement

    @property
    def ratio(self) -> float:
        """baseline / candidate. Raises ZeroDivisionError if the candidate took no time."""
        if self.candidate.elapsed_time == 0:
            raise ZeroDivisionError(f"cannot compute ratio: {self.candidate.label!r} elapsed_time is 0")
        return self.baseline.elapsed_time / self.candidate.elapsed_time

    @property
    def faster(self) -> Measurement:
        if self.candidate.elapsed_time <= self.baseline.elapsed_time:
            return self.candidate
        return self.baseline

    @property
    def slower(self) -> Measurement:
        return self.baseline if self.faster is self.candidate else self.candidate

    @property
    def speedup(self) -> float:
        """Slower time over faster time, always >= 1."""
        if self.faster.elapsed_time == 0:
            raise ZeroDivisionError(f"cannot compute speedup: {self.faster.label!r} elapsed_time is 0")
        return self.slower.elapsed_time / self.faster.elapsed_time


@dataclass
class BenchmarkConfig:
    workload: str = "len"
    iterations: int = 1000
    size: int = 1000  # inner loop length
    repeats: int = 1
    seed: Optional[int] = 42


@dataclass
class BenchmarkResult:
    config: BenchmarkConfig
    comparisons: list[ComparisonResult] = field(default_factory=list)
    run_id: Optional[str] = None
    runtime: str = ""  # e.g. CPython, PyPy
    runtime_version: str = ""
    stats: Optional[dict] = None


@dataclass
class SuiteRunConfig:
    """Config for batch suite: workloads x iteration counts."""
    workloads: list[str]
    iteration_counts: list[int]
    size: int = 1000
    repeats: int = 3
    seed: Optional[int] = 42


@dataclass
class SuiteRunResult:
    run_id: str
    config_hash: str
    results: list[BenchmarkResult]
    aggregated_csv_path: Optional[str] = None
    manifest_path: Optional[str] = None
    chart_path: Optional[str] = None
