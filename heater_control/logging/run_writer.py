"""Run directory writer."""
from __future__ import annotations

import json
import time
import uuid
from pathlib import Path
from typing import Any, Dict

from heater_control.config import Config


def make_run_id(prefix: str = "run") -> str:
    """Timestamped id with a random suffix, unique across runs in the same second."""
    ts = time.strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}_{uuid.uuid4().hex[:6]}"


def prepare_run_dir(base: str, run_id: str) -> Path:
    run_dir = Path(base) / run_id
    run_dir.parent.mkdir(parents=True, exist_ok=True)
    # A clashing id must fail rather than overwrite an earlier run.
    run_dir.mkdir(exist_ok=False)
    return run_dir


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.write_text(json.dumps(payload, indent=2))


def write_config(run_dir: Path, cfg: Config) -> None:
    _write_json(run_dir / "config.json", cfg.to_dict())


def write_summary(run_dir: Path, summary: Dict[str, Any]) -> None:
    _write_json(run_dir / "summary.json", summary)
