"""Integer PID heater control with a closed-loop heater simulator."""
from heater_control.config import Config
from heater_control.control import PID32, InvalidConfiguration
from heater_control.sim import Simulator

__all__ = ["Config", "PID32", "InvalidConfiguration", "Simulator"]
