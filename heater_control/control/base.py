"""Controller algorithm interface."""
from __future__ import annotations


class ControllerAlgorithm:
    """Base interface for heater control algorithms.

    Readings and targets are 10-bit ADC values; outputs are drive levels.
    """

    def next_value(self, current_reading: int) -> int:
        raise NotImplementedError

    def set_target(self, new_target: int) -> None:
        raise NotImplementedError
