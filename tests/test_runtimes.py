"""Tests for cross-interpreter comparison."""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest

from bench.runtimes import PACKAGE_ROOT, child_env, build_command, discover_interpreters, run_under, compare_runtimes, format_runtime_table
from bench.schemas import BenchmarkConfig, BenchmarkResult, ComparisonResult, Measurement
from bench.metrics import summarize


def _result(runtime, base, cand, version="3.x"):
    comps = [ComparisonResult(Measurement("recompute", base, 10), Measurement("hoisted", cand, 10))]
    return BenchmarkResult(config=BenchmarkConfig(), comparisons=comps, runtime=runtime,
                           runtime_version=version, stats=summarize(comps))


def test_build_command():
    cmd = build_command("/usr/bin/pypy3", BenchmarkConfig(workload="sqrt", iterations=7, size=9, repeats=2, seed=None))
    assert cmd[:5] == ["/usr/bin/pypy3", "-m", "bench", "run", "--json"]
    assert "--seed" not in cmd
    assert cmd[cmd.index("--iterations") + 1] == "7"


def test_discover_interpreters_starts_with_current():
    found = discover_interpreters(candidates=())
    assert found == [sys.executable]


def test_run_under_current_interpreter():
    config = BenchmarkConfig(workload="len", iterations=3, size=5, repeats=1)
    result = run_under(sys.executable, config, cwd=str(ROOT))
    assert result.config.workload == "len"
    assert len(result.comparisons) == 1
    assert result.runtime


def test_run_under_failure_raises():
    config = BenchmarkConfig(workload="nope")
    with pytest.raises(RuntimeError, match="unknown workload"):
        run_under(sys.executable, config, cwd=str(ROOT))


def test_compare_runtimes_explicit_interpreters():
    results = compare_runtimes(BenchmarkConfig(iterations=2, size=5), interpreters=[sys.executable], cwd=str(ROOT))
    assert len(results) == 1


def test_format_runtime_table():
    lines = format_runtime_table([_result("CPython", 2.0, 1.0), _result("PyPy", 0.2, 0.1)])
    assert lines[0] == "CPython 3.x: recompute 2.00s, hoisted 1.00s, ratio 2.00"
    assert lines[1] == "PyPy 3.x: recompute 0.20s, hoisted 0.10s, ratio 2.00"
    assert lines[2] == "PyPy 3.x is faster than CPython 3.x by a factor of 10.00"


def test_format_runtime_table_same_runtime_different_versions():
    lines = format_runtime_table([_result("CPython", 1.0, 0.5, "3.11.9"), _result("CPython", 1.0, 0.25, "3.13.1")])
    assert lines[-1] == "CPython 3.13.1 is faster than CPython 3.11.9 by a factor of 2.00"


def test_child_env_puts_package_root_first(monkeypatch):
    monkeypatch.setenv("PYTHONPATH", "/some/other/path")
    env = child_env()
    parts = env["PYTHONPATH"].split(os.pathsep)
    assert parts[0] == PACKAGE_ROOT
    assert parts[1] == "/some/other/path"
    assert Path(PACKAGE_ROOT, "bench", "__main__.py").exists()


def test_run_under_from_unrelated_cwd(tmp_path):
    result = run_under(sys.executable, BenchmarkConfig(iterations=2, size=5), cwd=str(tmp_path))
    assert len(result.comparisons) == 1
