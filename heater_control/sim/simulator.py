"""Closed-loop heater simulation: ADC sampling, control update, heater actuation."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Tuple

import numpy as np

from heater_control.config import Config
from heater_control.control import MAX_RESULT, PID32, make_controller
from heater_control.logging.parquet_logger import ParquetLogger
from heater_control.logging.run_writer import make_run_id, prepare_run_dir, write_config, write_summary
from heater_control.seeding import make_rng
from heater_control.sim.adc import AdcModel
from heater_control.sim.plant import HeaterPlant
from heater_control.sim.schedule import SetpointSchedule

log = logging.getLogger(__name__)


@dataclass
class SimulationOutput:
    run_id: str
    summary: Dict[str, Any]
    output_dir: str


class Simulator:
    def __init__(self, cfg: Config) -> None:
        self.cfg = cfg
        self.rng = make_rng(cfg.sim.seed)
        self.controller = make_controller(cfg.controller)
        self.plant = HeaterPlant(cfg.plant)
        self.adc = AdcModel(cfg.adc, rng=self.rng)
        self.schedule = SetpointSchedule(cfg.sim.setpoints)
        self.step_idx = 0
        self.time_s = 0.0
        # Only the settle window is kept.
        self.errors: Deque[int] = deque(maxlen=max(0, cfg.sim.settle_window))

    def step(self) -> Tuple[Dict[str, Any], bool]:
        changed = self.schedule.due(self.step_idx)
        if changed is not None:
            log.info("step %d: setpoint -> %d", self.step_idx, changed)
            self.controller.set_target(changed)

        # Sample before actuating: the drive computed here holds for the whole interval.
        temperature = self.plant.temperature_c
        reading = self.adc.sample(temperature)
        drive = self.controller.next_value(reading)
        plant_state = self.plant.step(drive, self.cfg.sim.dt_s)

        row: Dict[str, Any] = {
            "step": self.step_idx,
            "time_s": self.time_s,
            "temperature_c": temperature,
            "adc": reading,
            "drive": drive,
            "power_w": plant_state.power_w,
            "setpoint_changed": int(changed is not None),
        }
        if isinstance(self.controller, PID32):
            terms = self.controller.last_terms
            row.update(
                {
                    "target_adc": self.controller.target,
                    "error": terms.error,
                    "p_term": terms.p_term,
                    "i_term": terms.i_term,
                    "d_term": terms.d_term,
                    "integral_state": self.controller.integral_state,
                }
            )
            self.errors.append(terms.error)

        self.step_idx += 1
        self.time_s += self.cfg.sim.dt_s
        done = self.step_idx >= self.cfg.sim.steps
        return row, done

    def _settled(self) -> bool:
        window = self.cfg.sim.settle_window
        if window <= 0 or len(self.errors) < window:
            return False
        tail = np.abs(np.asarray(self.errors, dtype=np.int64))
        return bool((tail <= self.cfg.sim.settle_band_adc).all())

    def run(self, output_root: str) -> SimulationOutput:
        run_id = make_run_id(self.cfg.sim.run_prefix)
        run_dir = prepare_run_dir(output_root, run_id)
        write_config(run_dir, self.cfg)

        logger = ParquetLogger(str(run_dir / "timeseries.parquet"))
        totals = {
            "drive": 0,
            "saturated_high_steps": 0,
            "saturated_low_steps": 0,
            "setpoint_changes": 0,
        }
        max_abs_integral = 0
        last_row: Dict[str, Any] = {}
        if self.cfg.sim.steps <= 0:
            log.warning("sim.steps=%d, nothing to simulate", self.cfg.sim.steps)
        while self.step_idx < self.cfg.sim.steps:
            row, done = self.step()
            row["run_id"] = run_id
            logger.append(row)
            totals["drive"] += row["drive"]
            totals["saturated_high_steps"] += int(row["drive"] >= MAX_RESULT)
            totals["saturated_low_steps"] += int(row["drive"] <= 0)
            totals["setpoint_changes"] += row["setpoint_changed"]
            if "integral_state" in row:
                max_abs_integral = max(max_abs_integral, abs(row["integral_state"]))
            last_row = row
            if done:
                break

        logger.flush()
        steps = self.step_idx
        summary = {
            "run_id": run_id,
            "steps": steps,
            "controller": self.cfg.controller.kind,
            "final_temperature_c": float(self.plant.temperature_c),
            "final_adc": int(last_row["adc"]) if last_row else None,
            "mean_drive": float(totals["drive"]) / steps if steps else 0.0,
            "saturated_high_steps": totals["saturated_high_steps"],
            "saturated_low_steps": totals["saturated_low_steps"],
            "setpoint_changes": totals["setpoint_changes"],
            "max_abs_integral": max_abs_integral,
            "settled": self._settled(),
        }
        write_summary(run_dir, summary)
        log.info("run %s finished after %d steps", run_id, steps)
        return SimulationOutput(run_id=run_id, summary=summary, output_dir=str(run_dir))
