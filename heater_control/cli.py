"""CLI entrypoints for heater_control."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from heater_control.config import load_config
from heater_control.control import make_controller
from heater_control.sim.replay import load_readings, replay_readings
from heater_control.sim.simulator import Simulator


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Python logging level",
)
def main(log_level: str) -> None:
    """Integer PID heater controller and simulator CLI."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@main.command("run")
@click.option("--config", "config_path", default=None, help="Path to config yaml/json")
@click.option("--output", "output_root", default="runs", help="Output directory")
@click.option("--steps", default=None, type=int, help="Override sim.steps")
def run_cmd(config_path: str | None, output_root: str, steps: int | None) -> None:
    cfg = load_config(config_path)
    if steps is not None:
        cfg.sim.steps = steps
    sim = Simulator(cfg)
    result = sim.run(output_root=output_root)
    click.echo(json.dumps(result.summary, indent=2))
    click.echo(f"Output: {result.output_dir}")


@main.command("replay")
@click.argument("readings_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", default=None, help="Path to config yaml/json")
@click.option("--column", default="adc", help="Column holding the ADC readings")
@click.option("--output", "output_path", default=None, help="Write results to .csv or .parquet")
def replay_cmd(readings_path: str, config_path: str | None, column: str, output_path: str | None) -> None:
    cfg = load_config(config_path)
    readings = load_readings(readings_path, column=column)
    df = replay_readings(make_controller(cfg.controller), readings)
    if output_path is None:
        for value in df["drive"]:
            click.echo(int(value))
        return
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    if out.suffix == ".parquet":
        df.to_parquet(out, index=False)
    elif out.suffix == ".csv":
        df.to_csv(out, index=False)
    else:
        raise click.BadParameter("output must be .csv or .parquet", param_hint="--output")
    click.echo(f"Output: {out}")


@main.command("step")
@click.option("--config", "config_path", default=None, help="Path to config yaml/json")
@click.option("--target", default=None, type=int, help="Setpoint in ADC units")
@click.argument("readings", nargs=-1, type=int, required=True)
def step_cmd(config_path: str | None, target: int | None, readings: tuple[int, ...]) -> None:
    cfg = load_config(config_path)
    ctrl = make_controller(cfg.controller)
    if target is not None:
        ctrl.set_target(target)
    for reading in readings:
        click.echo(ctrl.next_value(reading))


if __name__ == "__main__":
    main()
