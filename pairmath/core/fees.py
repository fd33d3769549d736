"""
Dynamic trading fee (deterministic, integer-only).

fee_bps = min(base + volatility_component + volume_component, max_fee_bps)

The volatility component has two curves, both monotone non-decreasing in
`price_volatility_bps`:
- linear: volatility_bps // volatility_divisor
- exponential: (exp(volatility_bps / scale) - 1) * weight, on the 1e18 scale

Fee state (volume, depth, volatility) is supplied per call; nothing is
remembered between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import EngineConfig, resolve_config
from ..kernels.python.fixed_point import EXP_MAX_INPUT, SCALE, exp, mul_div, require_u256


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeParameters:
    volume_window: int
    liquidity_depth: int
    price_volatility_bps: int

    def __post_init__(self) -> None:
        for name, v in (
            ("volume_window", self.volume_window),
            ("liquidity_depth", self.liquidity_depth),
            ("price_volatility_bps", self.price_volatility_bps),
        ):
            require_u256(name, v)


@dataclass(frozen=True)
class FeeBreakdown:
    base_bps: int
    volatility_bps: int
    volume_bps: int
    total_bps: int
    capped: bool


def _volatility_component(price_volatility_bps: int, config: EngineConfig) -> int:
    if config.fee_curve == "linear":
        return price_volatility_bps // config.volatility_divisor

    # Saturate before scaling: past EXP_MAX_INPUT the fee is capped anyway.
    if price_volatility_bps > mul_div(EXP_MAX_INPUT, config.volatility_exp_scale_bps, SCALE):
        x = EXP_MAX_INPUT
    else:
        x = mul_div(price_volatility_bps, SCALE, config.volatility_exp_scale_bps)
    return mul_div(exp(x) - SCALE, config.volatility_exp_weight_bps, SCALE)


def _volume_component(volume_window: int, liquidity_depth: int, config: EngineConfig) -> int:
    if liquidity_depth == 0:
        return 0
    return mul_div(volume_window, config.volume_multiplier, liquidity_depth)


def quote_dynamic_fee_breakdown(params: FeeParameters, *, config: Optional[EngineConfig] = None) -> FeeBreakdown:
    """Per-component view of `quote_dynamic_fee`."""
    cfg = resolve_config(config)
    vol = _volatility_component(params.price_volatility_bps, cfg)
    volume = _volume_component(params.volume_window, params.liquidity_depth, cfg)
    uncapped = cfg.base_fee_bps + vol + volume
    total = min(uncapped, cfg.max_fee_bps)
    logger.debug(
        "dynamic fee: base=%d volatility=%d volume=%d curve=%s -> %d bps",
        cfg.base_fee_bps,
        vol,
        volume,
        cfg.fee_curve,
        total,
    )
    return FeeBreakdown(
        base_bps=cfg.base_fee_bps,
        volatility_bps=vol,
        volume_bps=volume,
        total_bps=total,
        capped=uncapped > cfg.max_fee_bps,
    )


def quote_dynamic_fee(params: FeeParameters, *, config: Optional[EngineConfig] = None) -> int:
    """
    Trading fee in basis points for the given market conditions.

    Always in [base_fee_bps, max_fee_bps].
    """
    return quote_dynamic_fee_breakdown(params, config=config).total_bps
