"""Run a single closed-loop heater simulation."""
from __future__ import annotations

import argparse
import json

from heater_control.config import load_config
from heater_control.seeding import set_global_seed
from heater_control.sim.simulator import Simulator


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=None, help="Path to config yaml/json")
    parser.add_argument("--output", default="runs", help="Output directory")
    args = parser.parse_args()

    cfg = load_config(args.config)
    set_global_seed(cfg.sim.seed)
    sim = Simulator(cfg)
    result = sim.run(output_root=args.output)
    print(json.dumps(result.summary, indent=2))
    print(f"Output: {result.output_dir}")


if __name__ == "__main__":
    main()
