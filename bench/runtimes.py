"""Run the same benchmark under several Python interpreters and compare them."""

import json
import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

from bench.schemas import BenchmarkConfig, BenchmarkResult
from bench.runner import result_from_dict

logger = logging.getLogger(__name__)

DEFAULT_INTERPRETERS = ("python3", "pypy3")

# Directory holding the bench and workloads packages.
PACKAGE_ROOT = str(Path(__file__).resolve().parents[1])


def discover_interpreters(candidates: Sequence[str] = DEFAULT_INTERPRETERS) -> list[str]:
    """Current interpreter first, then any candidates on PATH that resolve to a different binary."""
    found = [sys.executable]
    seen = {os.path.realpath(sys.executable)}
    for name in candidates:
        path = shutil.which(name)
        if path and os.path.realpath(path) not in seen:
            seen.add(os.path.realpath(path))
            found.append(path)
    return found


def build_command(interpreter: str, config: BenchmarkConfig) -> list[str]:
    cmd = [
        interpreter, "-m", "bench", "run", "--json",
        "--workload", config.workload,
        "--iterations", str(config.iterations),
        "--size", str(config.size),
        "--repeats", str(config.repeats),
    ]
    if config.seed is not None:
        cmd += ["--seed", str(config.seed)]
    return cmd


def child_env() -> dict:
    """Environment for a child interpreter that may not have this package installed."""
    env = dict(os.environ)
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = PACKAGE_ROOT + (os.pathsep + existing if existing else "")
    return env


def _runtime_name(r: BenchmarkResult) -> str:
    return f"{r.runtime} {r.runtime_version}".strip()


def run_under(interpreter: str, config: BenchmarkConfig, cwd: Optional[str] = None) -> BenchmarkResult:
    """Run one benchmark in a child interpreter. Raises RuntimeError carrying its stderr on failure."""
    cmd = build_command(interpreter, config)
    logger.info("running %s", " ".join(cmd))
    proc = subprocess.run(cmd, capture_output=True, text=True, cwd=cwd, env=child_env())
    if proc.returncode != 0:
        raise RuntimeError(f"{interpreter} exited with status {proc.returncode}: {proc.stderr.strip()}")
    return result_from_dict(json.loads(proc.stdout))


def compare_runtimes(
    config: BenchmarkConfig,
    interpreters: Optional[Sequence[str]] = None,
    cwd: Optional[str] = None,
) -> list[BenchmarkResult]:
    """One run per interpreter, strictly one after another."""
    interpreters = list(interpreters) if interpreters else discover_interpreters()
    return [run_under(interp, config, cwd=cwd) for interp in interpreters]


def format_runtime_table(results: list[BenchmarkResult]) -> list[str]:
    lines = []
    for r in results:
        stats = r.stats or {}
        base = (stats.get("baseline_s") or {}).get("mean", 0.0)
        cand = (stats.get("candidate_s") or {}).get("mean", 0.0)
        ratio = (stats.get("ratio") or {}).get("mean")
        ratio_s = f"{ratio:.2f}" if ratio is not None else "n/a"
        lines.append(
            f"{_runtime_name(r)}: {stats.get('baseline_label', 'recompute')} {base:.2f}s, "
            f"{stats.get('candidate_label', 'hoisted')} {cand:.2f}s, ratio {ratio_s}"
        )
    timed = [r for r in results if (r.stats or {}).get("candidate_s", {}).get("mean")]
    if len(timed) > 1:
        fastest = min(timed, key=lambda r: r.stats["candidate_s"]["mean"])
        for r in timed:
            if r is fastest:
                continue
            factor = r.stats["candidate_s"]["mean"] / fastest.stats["candidate_s"]["mean"]
            lines.append(f"{_runtime_name(fastest)} is faster than {_runtime_name(r)} by a factor of {factor:.2f}")
    return lines
