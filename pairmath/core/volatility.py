"""Realised volatility from a price history, in basis points.

Uses log returns r_i = ln(p_i / p_{i-1}) over the most recent `window`
prices (oldest first), the unbiased sample variance

    var = (n * sum(r^2) - sum(r)^2) / (n * (n - 1))

annualised by `periods_per_year`, and returns sqrt(var) in bps. The result
is the `price_volatility_bps` input of the dynamic fee model.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import EngineConfig, resolve_config
from ..errors import DomainError
from ..kernels.python.fixed_point import BPS_DENOM, SCALE, checked_mul, ln, mul_div, require_u256, sqrt_fixed


MIN_WINDOW = 3


def log_returns(prices: Sequence[int]) -> list[int]:
    """Signed 1e18-scaled log returns between consecutive prices."""
    out: list[int] = []
    for i, p in enumerate(prices):
        if require_u256(f"prices[{i}]", p) == 0:
            raise DomainError(f"prices[{i}] must be positive")
    for prev, cur in zip(prices, prices[1:]):
        out.append(ln(mul_div(cur, SCALE, prev)))
    return out


def estimate_volatility_bps(
    prices: Sequence[int],
    *,
    window: int,
    periods_per_year: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> int:
    if not isinstance(window, int) or isinstance(window, bool):
        raise TypeError("window must be an int")
    if window < MIN_WINDOW:
        raise DomainError(f"window must be >= {MIN_WINDOW}: {window}")
    if len(prices) < window:
        raise DomainError(f"need at least {window} prices, got {len(prices)}")
    periods = resolve_config(config).periods_per_year if periods_per_year is None else periods_per_year
    if require_u256("periods_per_year", periods) == 0:
        raise DomainError("periods_per_year must be positive")

    returns = log_returns(list(prices[-window:]))
    n = len(returns)
    total = sum(returns)
    total_sq = 0
    for r in returns:
        total_sq += checked_mul(abs(r), abs(r))

    # scaled by 1e36 until the final division brings it back to 1e18
    spread = checked_mul(n, total_sq) - checked_mul(abs(total), abs(total))
    variance = max(spread, 0) // (n * (n - 1) * SCALE)

    annualised = checked_mul(variance, periods)
    return mul_div(sqrt_fixed(annualised), BPS_DENOM, SCALE)
