"""Column schema for simulation timeseries output."""
from __future__ import annotations

from typing import List, Tuple


def timeseries_columns() -> List[Tuple[str, str]]:
    return [
        ("run_id", "string"),
        ("step", "int64"),
        ("time_s", "float64"),
        ("temperature_c", "float64"),
        ("adc", "int64"),
        ("target_adc", "int64"),
        ("error", "int64"),
        ("p_term", "int64"),
        ("i_term", "int64"),
        ("d_term", "int64"),
        ("integral_state", "int64"),
        ("drive", "int64"),
        ("power_w", "float64"),
        ("setpoint_changed", "int8"),
    ]
