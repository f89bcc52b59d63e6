"""Run a short simulation and validate outputs."""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from heater_control.config import load_config
from heater_control.sim.simulator import Simulator
from heater_control.utils.validation import schema_missing, validate_output_bounds, validate_timeseries_schema


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=None, help="Path to config yaml/json")
    parser.add_argument("--output", default="runs/validate", help="Output directory")
    parser.add_argument("--steps", type=int, default=50, help="Simulation steps")
    args = parser.parse_args()

    cfg = load_config(args.config)
    cfg.sim.steps = args.steps
    sim = Simulator(cfg)
    result = sim.run(output_root=args.output)
    parquet_path = Path(result.output_dir) / "timeseries.parquet"
    missing = schema_missing(validate_timeseries_schema(str(parquet_path)))
    if missing:
        print(f"Missing columns: {missing}")
        return 1
    bounds = validate_output_bounds(pd.read_parquet(parquet_path), cfg.controller.integral_limit)
    failed = schema_missing(bounds)
    if failed:
        print(f"Bounds violated: {failed}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
