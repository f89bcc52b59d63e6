"""Utility helpers: run output validation and schema checks."""
from heater_control.utils.validation import (
    schema_missing,
    validate_output_bounds,
    validate_timeseries_schema,
)

__all__ = ["schema_missing", "validate_output_bounds", "validate_timeseries_schema"]
