"""Tests for the command line entry point."""

import json
import re
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bench.cli import main
from workloads import WORKLOADS
from workloads.base import BaseWorkload, Variant, VariantPair

TIME_LINE = re.compile(r"^\w+: \d+\.\d{2}s$")
RATIO_LINE = re.compile(r"^\w+ is faster than \w+ by a factor of \d+\.\d{2}$")


def test_default_run_prints_report(capsys):
    assert main(["--iterations", "1000", "--size", "10"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert TIME_LINE.match(lines[0]) and lines[0].startswith("recompute: ")
    assert TIME_LINE.match(lines[1]) and lines[1].startswith("hoisted: ")
    assert RATIO_LINE.match(lines[2])


def test_run_json(capsys):
    assert main(["run", "--json", "--workload", "sqrt", "--iterations", "3", "--size", "5", "--repeats", "2"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["config"]["workload"] == "sqrt"
    assert len(data["comparisons"]) == 2
    assert data["comparisons"][0]["baseline"]["iteration_count"] == 3


def test_unknown_workload_exits_nonzero(capsys):
    assert main(["run", "--workload", "nope"]) == 1
    captured = capsys.readouterr()
    assert "unknown workload" in captured.err
    assert captured.out == ""


def test_invalid_iterations_exits_nonzero(capsys):
    assert main(["--iterations", "0"]) == 1
    assert "iterations" in capsys.readouterr().err


def test_config_file_with_flag_override(tmp_path, capsys):
    cfg = tmp_path / "exp.json"
    cfg.write_text(json.dumps({"workload": "constant_expr", "iterations": 4, "size": 8}))
    assert main(["run", "--config", str(cfg), "--iterations", "2", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["config"]["workload"] == "constant_expr"
    assert data["config"]["iterations"] == 2
    assert data["config"]["size"] == 8


def test_run_with_out_dir(tmp_path, capsys):
    assert main(["run", "--iterations", "3", "--size", "5", "--out-dir", str(tmp_path)]) == 0
    capsys.readouterr()
    run_dirs = list((tmp_path / "runs").iterdir())
    assert len(run_dirs) == 1
    assert (run_dirs[0] / "manifest.json").exists()
    assert (run_dirs[0] / "run.log").exists()
    assert list(tmp_path.glob("run_*.json"))


def test_list_workloads(capsys):
    assert main(["workloads"]) == 0
    out = capsys.readouterr().out
    for name in ("len", "sqrt", "attribute", "constant_expr"):
        assert f"{name}: " in out
    assert "  hoisted: len(data) evaluated once before the loop" in out


def test_suite_command(tmp_path, capsys):
    assert main(["suite", "--workloads", "len", "--iterations", "2", "5", "--size", "5",
                 "--repeats", "1", "--out-dir", str(tmp_path), "--no-chart"]) == 0
    out = capsys.readouterr().out
    assert "len x2: ratio" in out
    assert "aggregated: " in out


class _FailingWorkload(BaseWorkload):
    name = "boom"
    description = "Hoisted variant raises."

    def build(self, size, seed=None):
        def fail():
            raise RuntimeError("variant exploded")
        return VariantPair(
            workload=self.name,
            recompute=Variant("recompute", lambda: None),
            hoisted=Variant("hoisted", fail),
        )


def test_failing_computation_exits_nonzero_without_report(monkeypatch, capsys):
    monkeypatch.setitem(WORKLOADS, "boom", _FailingWorkload())
    assert main(["--workload", "boom", "--repeats", "2", "--iterations", "3", "--size", "5"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "variant exploded" in captured.err
