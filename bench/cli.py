"""Command line: run (default), suite, runtimes, workloads."""

import argparse
import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Optional, Sequence

from bench.experiment_config import ExperimentConfig
from bench.runner import run_benchmark, format_result, result_to_dict, save_result
from bench.runtimes import compare_runtimes, format_runtime_table
from bench.logging_utils import configure_root_logging, set_run_log_path, clear_run_log_path
from workloads import WORKLOADS

logger = logging.getLogger(__name__)

COMMANDS = ("run", "suite", "runtimes", "workloads")


def _add_run_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--workload", help=f"one of: {', '.join(WORKLOADS)} (default: len)")
    p.add_argument("--iterations", type=int, help="calls per variant (default: 1000)")
    p.add_argument("--size", type=int, help="inner loop length (default: 1000)")
    p.add_argument("--repeats", type=int, help="independent A/B pairs (default: 1)")
    p.add_argument("--seed", type=int, help="seed for workload input data (default: 42)")
    p.add_argument("--config", help="JSON file with an ExperimentConfig; flags override it")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")

    parser = argparse.ArgumentParser(
        prog="hoist-bench",
        description="Time a loop with its invariant recomputed every iteration against the hoisted form.",
    )
    sub = parser.add_subparsers(dest="command")

    run_p = sub.add_parser("run", parents=[common], help="benchmark one workload on this interpreter")
    _add_run_options(run_p)
    run_p.add_argument("--json", action="store_true", help="print the result as JSON")
    run_p.add_argument("--out-dir", help="also write result JSON and artifacts here")

    suite_p = sub.add_parser("suite", parents=[common], help="sweep workloads x iteration counts")
    suite_p.add_argument("--workloads", nargs="+", default=list(WORKLOADS))
    suite_p.add_argument("--iterations", nargs="+", type=int, default=[10, 100, 1000])
    suite_p.add_argument("--size", type=int, default=1000)
    suite_p.add_argument("--repeats", type=int, default=3)
    suite_p.add_argument("--seed", type=int, default=42)
    suite_p.add_argument("--out-dir", default="data/runs")
    suite_p.add_argument("--no-chart", action="store_true")

    rt_p = sub.add_parser("runtimes", parents=[common], help="run the same benchmark under several interpreters")
    _add_run_options(rt_p)
    rt_p.add_argument("--interpreters", nargs="+", help="interpreter paths (default: this one, python3, pypy3)")

    sub.add_parser("workloads", parents=[common], help="list available workloads")
    return parser


def load_experiment_config(args: argparse.Namespace) -> ExperimentConfig:
    data = {}
    if args.config:
        data = json.loads(Path(args.config).read_text())
    for key in ("workload", "iterations", "size", "repeats", "seed"):
        value = getattr(args, key)
        if value is not None:
            data[key] = value
    return ExperimentConfig(**data)


def _cmd_run(args: argparse.Namespace) -> int:
    config = load_experiment_config(args).to_benchmark_config()
    if args.out_dir:
        from bench.artifacts import write_run_artifacts
        run_id = str(uuid.uuid4())[:8]
        run_dir = Path(args.out_dir) / "runs" / run_id
        set_run_log_path(str(run_dir / "run.log"))
        try:
            result = run_benchmark(config, run_id=run_id)
            save_result(result, args.out_dir)
            write_run_artifacts(result, str(run_dir))
        finally:
            clear_run_log_path()
        logger.info("artifacts written to %s", run_dir)
    else:
        result = run_benchmark(config)
    if args.json:
        print(json.dumps(result_to_dict(result)))
    else:
        for line in format_result(result):
            print(line)
    return 0


def _cmd_suite(args: argparse.Namespace) -> int:
    from bench.schemas import SuiteRunConfig
    from bench.suite_runner import run_suite
    suite_config = SuiteRunConfig(
        workloads=args.workloads,
        iteration_counts=args.iterations,
        size=args.size,
        repeats=args.repeats,
        seed=args.seed,
    )
    result = run_suite(suite_config, out_dir=args.out_dir, chart=not args.no_chart)
    for r in result.results:
        ratio = ((r.stats or {}).get("ratio") or {}).get("mean")
        ratio_s = f"{ratio:.2f}" if ratio is not None else "n/a"
        print(f"{r.config.workload} x{r.config.iterations}: ratio {ratio_s}")
    print(f"aggregated: {result.aggregated_csv_path}")
    if result.chart_path:
        print(f"chart: {result.chart_path}")
    return 0


def _cmd_runtimes(args: argparse.Namespace) -> int:
    config = load_experiment_config(args).to_benchmark_config()
    results = compare_runtimes(config, interpreters=args.interpreters)
    for line in format_runtime_table(results):
        print(line)
    return 0


def _cmd_workloads(args: argparse.Namespace) -> int:
    for name, w in WORKLOADS.items():
        print(f"{name}: {w.description}")
        for v in w.build(size=1):
            print(f"  {v.label}: {v.description}")
    return 0


HANDLERS = {
    "run": _cmd_run,
    "suite": _cmd_suite,
    "runtimes": _cmd_runtimes,
    "workloads": _cmd_workloads,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help")):
        argv = ["run"] + argv
    args = build_parser().parse_args(argv)
    configure_root_logging(logging.INFO if args.verbose else logging.WARNING)
    try:
        return HANDLERS[args.command](args)
    except Exception as e:
        # No partial report: the underlying message is all the user sees.
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
