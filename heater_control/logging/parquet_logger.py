"""Parquet logger for timeseries output."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd

from heater_control.schemas import timeseries_columns

log = logging.getLogger(__name__)


class ParquetLogger:
    def __init__(self, path: str, schema: List[Tuple[str, str]] | None = None) -> None:
        self.path = Path(path)
        self.schema = schema or timeseries_columns()
        self.rows: List[Dict] = []

    def __len__(self) -> int:
        return len(self.rows)

    def append(self, row: Dict) -> None:
        self.rows.append(row)

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(self.rows)
        # Ensure all columns exist and enforce dtypes
        for col, dtype in self.schema:
            if col not in df.columns:
                if dtype.startswith("float"):
                    df[col] = np.nan
                else:
                    df[col] = pd.NA
        # Reorder to schema
        df = df[[col for col, _dtype in self.schema]]
        # Cast types
        for col, dtype in self.schema:
            if dtype.startswith("float"):
                df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
            elif dtype.startswith("int"):
                series = pd.to_numeric(df[col], errors="coerce")
                if dtype == "int8":
                    df[col] = series.astype("Int8")
                else:
                    df[col] = series.astype("Int64")
            else:
                df[col] = df[col].astype("string")
        return df

    def flush(self) -> None:
        if not self.rows:
            return
        df = self.to_frame()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        df.to_parquet(self.path, index=False)
        log.debug("wrote %d rows to %s", len(df), self.path)
        self.rows = []
