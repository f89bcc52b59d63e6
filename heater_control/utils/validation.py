"""Validation helpers for simulation runs."""
from __future__ import annotations

from typing import Dict, List

import pandas as pd

from heater_control.control import MAX_RESULT
from heater_control.schemas import timeseries_columns


def validate_timeseries_schema(path: str) -> Dict[str, bool]:
    cols = [name for name, _dtype in timeseries_columns()]
    df = pd.read_parquet(path)
    results = {}
    for col in cols:
        results[col] = col in df.columns
    return results


def validate_output_bounds(df: pd.DataFrame, integral_limit: int | None = None) -> Dict[str, bool]:
    results = {"drive_in_range": True, "integral_in_limit": True}
    if "drive" in df.columns and len(df):
        drive = df["drive"].dropna()
        results["drive_in_range"] = bool(((drive >= 0) & (drive <= MAX_RESULT)).all())
    if integral_limit is not None and "integral_state" in df.columns and len(df):
        integral = df["integral_state"].dropna().abs()
        results["integral_in_limit"] = bool((integral <= abs(integral_limit)).all())
    return results


def schema_missing(results: Dict[str, bool]) -> List[str]:
    return [k for k, v in results.items() if not v]
