"""Simulation package: heater plant, ADC model, and the closed-loop simulator."""
from heater_control.sim.adc import AdcModel
from heater_control.sim.plant import HeaterPlant, PlantState
from heater_control.sim.replay import load_readings, replay_readings
from heater_control.sim.schedule import SetpointSchedule
from heater_control.sim.simulator import SimulationOutput, Simulator

__all__ = [
    "AdcModel",
    "HeaterPlant",
    "PlantState",
    "SetpointSchedule",
    "SimulationOutput",
    "Simulator",
    "load_readings",
    "replay_readings",
]
