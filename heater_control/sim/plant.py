"""Lumped first-order thermal model of the heated body."""
from __future__ import annotations

from dataclasses import dataclass

from heater_control.config import PlantConfig

MAX_DRIVE = 255


@dataclass
class PlantState:
    temperature_c: float
    power_w: float = 0.0


class HeaterPlant:
    def __init__(self, cfg: PlantConfig) -> None:
        if cfg.heat_capacity_j_k <= 0:
            raise ValueError(f"heat_capacity_j_k must be > 0, got {cfg.heat_capacity_j_k}")
        if cfg.thermal_resistance_k_w <= 0:
            raise ValueError(f"thermal_resistance_k_w must be > 0, got {cfg.thermal_resistance_k_w}")
        self.cfg = cfg
        self.reset()

    def reset(self) -> None:
        self.state = PlantState(temperature_c=float(self.cfg.initial_temperature_c))

    @property
    def temperature_c(self) -> float:
        return self.state.temperature_c

    def power_for_drive(self, drive: int) -> float:
        drive = max(0, min(MAX_DRIVE, int(drive)))
        return self.cfg.max_power_w * drive / MAX_DRIVE

    def step(self, drive: int, dt: float) -> PlantState:
        """Advance by dt seconds with the heater held at the given drive level.

        Heat input is proportional to drive; losses follow Newton's law of
        cooling through a single thermal resistance to ambient.
        """
        power = self.power_for_drive(drive)
        temp = self.state.temperature_c
        loss = (temp - self.cfg.ambient_c) / self.cfg.thermal_resistance_k_w
        d_temp = (power - loss) / self.cfg.heat_capacity_j_k * dt
        self.state = PlantState(temperature_c=temp + d_temp, power_w=power)
        return self.state
