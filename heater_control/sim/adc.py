"""Temperature sensor front end: linear transfer to an N-bit ADC code."""
from __future__ import annotations

import numpy as np

from heater_control.config import AdcConfig


class AdcModel:
    def __init__(self, cfg: AdcConfig, rng: np.random.Generator | None = None) -> None:
        if cfg.slope == 0:
            raise ValueError("adc slope cannot be 0")
        self.cfg = cfg
        self.rng = rng or np.random.default_rng()
        self.max_code = (1 << cfg.bits) - 1

    def temperature_to_adc(self, temperature_c: float) -> float:
        return self.cfg.offset + self.cfg.slope * temperature_c

    def adc_to_temperature(self, adc: float) -> float:
        return (adc - self.cfg.offset) / self.cfg.slope

    def sample(self, temperature_c: float) -> int:
        value = self.temperature_to_adc(temperature_c)
        if self.cfg.noise_std > 0:
            value += float(self.rng.normal(0.0, self.cfg.noise_std))
        return int(np.clip(round(value), 0, self.max_code))
