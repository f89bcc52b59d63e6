"""Control algorithms: integer PID and the controller factory."""
from __future__ import annotations

from heater_control.config import ControllerConfig
from heater_control.control.base import ControllerAlgorithm
from heater_control.control.pid import (
    INITIAL_LAST_ADC,
    INITIAL_TARGET_ADC,
    MAX_RESULT,
    PID32,
    ControllerState,
    InvalidConfiguration,
    PIDGains,
    PIDTerms,
    trunc_div,
)


def make_controller(cfg: ControllerConfig) -> ControllerAlgorithm:
    kind = cfg.kind.lower()
    if kind == "pid32":
        ctrl = PID32(
            p_gain=cfg.p_gain,
            i_gain=cfg.i_gain,
            d_gain=cfg.d_gain,
            integral_limit=cfg.integral_limit,
            output_divisor=cfg.output_divisor,
        )
        if cfg.initial_target != INITIAL_TARGET_ADC:
            ctrl.set_target(cfg.initial_target)
        return ctrl
    raise ValueError(f"Unknown controller kind: {cfg.kind}")


__all__ = [
    "ControllerAlgorithm",
    "ControllerState",
    "INITIAL_LAST_ADC",
    "INITIAL_TARGET_ADC",
    "InvalidConfiguration",
    "MAX_RESULT",
    "PID32",
    "PIDGains",
    "PIDTerms",
    "make_controller",
    "trunc_div",
]
