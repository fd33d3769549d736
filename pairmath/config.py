"""
Engine parameters.

Defaults ship as `kernels/params/engine_v1.yaml`; each field may be overridden
with an environment variable `PAIRMATH_<FIELD>` (e.g. `PAIRMATH_MAX_FEE_BPS`).
The resulting `EngineConfig` is immutable and passed explicitly to the
operations that need it, so the engine itself holds no mutable state.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml


logger = logging.getLogger(__name__)

ENV_PREFIX = "PAIRMATH_"
PARAMS_VERSION = 1

FEE_CURVES = ("linear", "exponential")
# Hard bound on chained route depth; keeps the search finite.
MAX_ROUTE_HOPS = 4


@dataclass(frozen=True)
class EngineConfig:
    base_fee_bps: int = 30
    max_fee_bps: int = 100
    fee_curve: str = "linear"
    volatility_divisor: int = 1000
    volume_multiplier: int = 10
    volatility_exp_weight_bps: int = 20
    volatility_exp_scale_bps: int = 10_000
    default_swap_fee_bps: int = 30
    max_route_hops: int = 3
    periods_per_year: int = 365

    def __post_init__(self) -> None:
        for f in fields(self):
            if f.name == "fee_curve":
                continue
            v = getattr(self, f.name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{f.name} must be an int")
            if v < 0:
                raise ValueError(f"{f.name} must be non-negative: {v}")
        if self.fee_curve not in FEE_CURVES:
            raise ValueError(f"fee_curve must be one of {FEE_CURVES}: {self.fee_curve!r}")
        for name in ("base_fee_bps", "max_fee_bps", "default_swap_fee_bps"):
            if getattr(self, name) > 10_000:
                raise ValueError(f"{name} must be in [0, 10000]: {getattr(self, name)}")
        if self.base_fee_bps > self.max_fee_bps:
            raise ValueError(f"base_fee_bps ({self.base_fee_bps}) > max_fee_bps ({self.max_fee_bps})")
        if self.volatility_divisor == 0:
            raise ValueError("volatility_divisor must be positive")
        if self.volatility_exp_scale_bps == 0:
            raise ValueError("volatility_exp_scale_bps must be positive")
        if not (1 <= self.max_route_hops <= MAX_ROUTE_HOPS):
            raise ValueError(f"max_route_hops must be in [1, {MAX_ROUTE_HOPS}]: {self.max_route_hops}")
        if self.periods_per_year == 0:
            raise ValueError("periods_per_year must be positive")


def default_params_path() -> Path:
    # pairmath/config.py -> pairmath/kernels/params/engine_v1.yaml
    return Path(__file__).resolve().parent / "kernels" / "params" / "engine_v1.yaml"


@lru_cache(maxsize=None)
def _load_params_file(path: str) -> dict[str, Any]:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise ValueError(f"engine params must be a mapping: {path}")
    version = obj.get("version")
    if version != PARAMS_VERSION:
        raise ValueError(f"unsupported engine params version {version!r} in {path}")

    known = {f.name for f in fields(EngineConfig)}
    flat: dict[str, Any] = {}
    for section, values in obj.items():
        if section == "version":
            continue
        if not isinstance(values, dict):
            raise ValueError(f"section {section!r} must be a mapping")
        for key, value in values.items():
            if key not in known:
                raise ValueError(f"unknown engine parameter {section}.{key}")
            if key in flat:
                raise ValueError(f"duplicate engine parameter {key}")
            flat[key] = value
    return flat


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("ignoring non-integer %s=%r; using %s", name, raw, default)
        return int(default)


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def load_config(path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """
    Build an EngineConfig from a params file plus environment overrides.

    `environ` defaults to `os.environ`; pass `{}` to ignore the environment.
    """
    params_path = Path(path) if path is not None else default_params_path()
    env = os.environ if environ is None else environ
    base = EngineConfig(**_load_params_file(str(params_path.resolve())))

    values: dict[str, Any] = {}
    for f in fields(EngineConfig):
        current = getattr(base, f.name)
        env_name = ENV_PREFIX + f.name.upper()
        if isinstance(current, str):
            values[f.name] = _env_str(env, env_name, current)
        else:
            values[f.name] = _env_int(env, env_name, current)

    config = EngineConfig(**values)
    logger.debug("loaded engine config from %s: %s", params_path, config)
    return config


@lru_cache(maxsize=1)
def default_config() -> EngineConfig:
    """Process-wide default config (packaged params + environment), built once."""
    return load_config()


def resolve_config(config: Optional[EngineConfig]) -> EngineConfig:
    return default_config() if config is None else config
