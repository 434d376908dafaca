"""ExperimentConfig (pydantic) and RunManifest with stable hashing."""

import hashlib
import json
from typing import Optional, Any

from pydantic import BaseModel, Field


class ExperimentConfig(BaseModel):
    """Validated benchmark configuration, e.g. loaded from a JSON file."""

    workload: str = Field(default="len", description="Workload name from the catalog")
    iterations: int = Field(default=1000, ge=1, description="Calls per variant per repeat")
    size: int = Field(default=1000, ge=1, le=10_000_000, description="Inner loop length")
    repeats: int = Field(default=1, ge=1, le=1000)
    seed: Optional[int] = Field(default=42, description="Seed for workload input data")

    def to_benchmark_config(self):
        """Convert to the BenchmarkConfig dataclass used by the runner."""
        from bench.schemas import BenchmarkConfig
        return BenchmarkConfig(
            workload=self.workload,
            iterations=self.iterations,
            size=self.size,
            repeats=self.repeats,
            seed=self.seed,
        )


class RunManifest(BaseModel):
    """Manifest for a single run: config hash, runtime, summary timings, artifact paths."""

    run_id: str
    config_hash: str
    config: dict = Field(default_factory=dict)
    workload: str = ""
    runtime: str = ""
    runtime_version: str = ""
    repeats: int = 0
    baseline_mean_s: Optional[float] = None
    candidate_mean_s: Optional[float] = None
    mean_ratio: Optional[float] = None
    artifacts: dict = Field(default_factory=dict, description="Paths: manifest, measurements, metrics, summary_csv, chart, run_log")


def stable_config_hash(config: Any) -> str:
    """Stable hash from config (sorted keys). Same config => same hash."""
    if hasattr(config, "model_dump"):
        d = config.model_dump()
    elif hasattr(config, "__dict__"):
        d = {k: v for k, v in config.__dict__.items() if not k.startswith("_")}
    else:
        d = dict(config) if hasattr(config, "items") else {}
    payload = json.dumps(d, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode()).hexdigest()[:16]
