"""Root logging setup and per-run structured log file."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, TextIO

_run_log_file: Optional[TextIO] = None


def configure_root_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """Configure root logger. Logs go to stderr so stdout carries only the report."""
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler(stream or sys.stderr)
        h.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        root.addHandler(h)


def set_run_log_path(path: str) -> None:
    """Set the path for the current run's log file. Call at start of a run."""
    global _run_log_file
    clear_run_log_path()
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        _run_log_file = open(path, "a", encoding="utf-8")


def clear_run_log_path() -> None:
    """Clear run log path and close file."""
    global _run_log_file
    if _run_log_file is not None:
        _run_log_file.close()
        _run_log_file = None


def run_log(
    event: str,
    level: str = "info",
    run_id: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Write a JSON line to the run log file (if set) and emit it on the bench.run logger."""
    payload = {
        "ts": datetime.now(tz=timezone.utc).isoformat(),
        "event": event,
        "level": level,
        **kwargs,
    }
    if run_id is not None:
        payload["run_id"] = run_id
    if _run_log_file is not None:
        _run_log_file.write(json.dumps(payload, default=str) + "\n")
        _run_log_file.flush()
    logger = logging.getLogger("bench.run")
    log_fn = getattr(logger, level.lower(), logger.info)
    log_fn("%s %s", event, kwargs)

