"""Replay recorded ADC readings through a controller."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from heater_control.control import PID32, ControllerAlgorithm


def replay_readings(controller: ControllerAlgorithm, readings: Iterable[int]) -> pd.DataFrame:
    """Feed readings in order and collect one row per control step.

    The controller is mutated; pass a fresh one for a reproducible replay.
    """
    rows: List[dict] = []
    for step, reading in enumerate(readings):
        reading = int(reading)
        output = controller.next_value(reading)
        row = {"step": step, "adc": reading, "drive": output}
        if isinstance(controller, PID32):
            terms = controller.last_terms
            row.update(
                {
                    "target_adc": controller.target,
                    "error": terms.error,
                    "p_term": terms.p_term,
                    "i_term": terms.i_term,
                    "d_term": terms.d_term,
                    "integral_state": controller.integral_state,
                }
            )
        rows.append(row)
    return pd.DataFrame(rows, columns=_columns(controller))


def _columns(controller: ControllerAlgorithm) -> List[str]:
    cols = ["step", "adc", "drive"]
    if isinstance(controller, PID32):
        cols += ["target_adc", "error", "p_term", "i_term", "d_term", "integral_state"]
    return cols


def load_readings(path: str, column: str = "adc") -> List[int]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Readings file not found: {path}")
    if p.suffix == ".parquet":
        df = pd.read_parquet(p)
    elif p.suffix == ".csv":
        df = pd.read_csv(p)
    else:
        raise ValueError("Readings file must be .csv or .parquet")
    if column not in df.columns:
        raise ValueError(f"Column {column!r} not in {path}; have {list(df.columns)}")
    series = pd.to_numeric(df[column], errors="raise")
    # Readings are order-dependent; a gap or a rounded value changes every later step.
    missing = series.isna()
    if missing.any():
        rows = list(series.index[missing][:5])
        raise ValueError(f"Column {column!r} in {path} has missing readings at rows {rows}")
    fractional = series % 1 != 0
    if fractional.any():
        rows = list(series.index[fractional][:5])
        raise ValueError(f"Column {column!r} in {path} has non-integer readings at rows {rows}")
    return [int(v) for v in series]
