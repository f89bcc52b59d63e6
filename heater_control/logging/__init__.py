"""Logging utilities: run directories, config/summary, and Parquet timeseries."""
from heater_control.logging.parquet_logger import ParquetLogger
from heater_control.logging.run_writer import make_run_id, prepare_run_dir, write_config, write_summary

__all__ = ["ParquetLogger", "make_run_id", "prepare_run_dir", "write_config", "write_summary"]
