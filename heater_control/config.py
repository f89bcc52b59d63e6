"""Configuration models and load utilities."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


@dataclass
class ControllerConfig:
    kind: str = "pid32"
    p_gain: int = 4
    i_gain: int = 1
    d_gain: int = 8
    integral_limit: int = 600
    output_divisor: int = 4
    initial_target: int = 830  # 10-bit ADC units


@dataclass
class PlantConfig:
    ambient_c: float = 20.0
    initial_temperature_c: float = 20.0
    max_power_w: float = 1500.0
    heat_capacity_j_k: float = 1000.0
    thermal_resistance_k_w: float = 0.25


@dataclass
class AdcConfig:
    # adc = offset + slope * temperature_c
    offset: float = 0.0
    slope: float = 4.0
    noise_std: float = 0.0
    bits: int = 10


@dataclass
class SimConfig:
    steps: int = 600
    dt_s: float = 1.0
    seed: int = 1234
    # Each entry is [step, target_adc], applied before that step's control update.
    setpoints: List[List[int]] = field(default_factory=list)
    settle_window: int = 30
    settle_band_adc: int = 8
    run_prefix: str = "heater"


@dataclass
class Config:
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    plant: PlantConfig = field(default_factory=PlantConfig)
    adc: AdcConfig = field(default_factory=AdcConfig)
    sim: SimConfig = field(default_factory=SimConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Config":
        def _merge(cls, payload):
            if payload is None:
                return cls()
            return cls(**payload)

        def _merge_controller(payload):
            if payload is None:
                return ControllerConfig()
            cc = ControllerConfig()
            for key, value in payload.items():
                if key == "kind":
                    cc.kind = str(value)
                elif hasattr(cc, key):
                    setattr(cc, key, _as_int(key, value))
                else:
                    raise ValueError(f"Unknown controller option: {key}")
            return cc

        def _merge_sim(payload):
            if payload is None:
                return SimConfig()
            sc = _merge(SimConfig, payload)
            for key in ("steps", "seed", "settle_window", "settle_band_adc"):
                setattr(sc, key, _as_int(key, getattr(sc, key)))
            sc.setpoints = [[_as_int("setpoints", v) for v in pair] for pair in sc.setpoints]
            # An unquoted YAML prefix such as 2024 loads as an int.
            sc.run_prefix = str(sc.run_prefix)
            return sc

        cfg = Config(
            controller=_merge_controller(data.get("controller")),
            plant=_merge(PlantConfig, data.get("plant")),
            adc=_merge(AdcConfig, data.get("adc")),
            sim=_merge_sim(data.get("sim")),
        )
        cfg.adc.bits = _as_int("bits", cfg.adc.bits)
        return cfg


def _as_int(key: str, value: Any) -> int:
    # Number coercion turns every numeric string into a float; integer fields take them back.
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"{key} must be an integer, got {value!r}")


def _load_config_dict(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    if p.suffix in {".yml", ".yaml"}:
        data = yaml.safe_load(p.read_text())
    elif p.suffix == ".json":
        data = json.loads(p.read_text())
    else:
        raise ValueError("Config file must be .json or .yaml")
    if data is None:
        data = {}
    if isinstance(data, dict) and "include" in data:
        include_paths = data.get("include") or []
        if not isinstance(include_paths, list):
            raise ValueError("include must be a list of file paths")
        merged: Dict[str, Any] = {}
        for inc in include_paths:
            inc_path = Path(inc)
            if not inc_path.is_absolute():
                inc_path = p.parent / inc_path
            inc_data = _load_config_dict(str(inc_path))
            merged = _deep_merge(merged, inc_data)
        # Overlay current file (excluding include)
        data = {k: v for k, v in data.items() if k != "include"}
        merged = _deep_merge(merged, data)
        data = merged
    return data


# Fields typed ``str`` keep their text even when it looks numeric.
_STRING_FIELDS = {"kind", "run_prefix"}


def _coerce_numbers(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: v if k in _STRING_FIELDS else _coerce_numbers(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce_numbers(v) for v in obj]
    if isinstance(obj, str):
        try:
            val = float(obj)
            return val
        except ValueError:
            return obj
    return obj


def load_config(path: Optional[str]) -> Config:
    if not path:
        return Config()
    data = _load_config_dict(path)
    data = _coerce_numbers(data)
    return Config.from_dict(data)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def save_config(cfg: Config, path: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(cfg.to_dict(), indent=2))
