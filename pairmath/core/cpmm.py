"""
Constant Product Market Maker (CPMM) quoting.

This module implements the caller-facing pool operations on top of the
integer swap kernel, with deterministic rounding rules.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per quote (O(log amount) for `optimize_swap_amount`)
- Space Complexity: O(1) auxiliary
- Invariant: After each swap, x' * y' >= k (where k = x * y before swap)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import EngineConfig, resolve_config
from ..errors import DomainError, InsufficientLiquidityError
from ..kernels.python.cpmm_swap import swap_exact_in as _kernel_swap_exact_in
from ..kernels.python.cpmm_swap import swap_exact_out as _kernel_swap_exact_out
from ..kernels.python.fixed_point import BPS_DENOM, require_u256


@dataclass(frozen=True)
class SwapQuote:
    """Complete result of a swap computation."""

    amount_out: int
    effective_fee_bps: int
    price_impact_bps: int
    amount_in: int
    fee_amount: int
    new_reserve_in: int
    new_reserve_out: int


@dataclass(frozen=True)
class OptimizationResult:
    optimal_amount: int
    expected_output: int
    price_impact_bps: int


def _price_impact_bps(amount_in: int, amount_out: int, reserve_in: int, reserve_out: int) -> int:
    # Zero-slippage quote at the current spot price (fee not deducted). Exact
    # ints: the result is a ratio in [0, 10000] even when `ideal` passes 2**256.
    ideal = amount_in * reserve_out // reserve_in
    if ideal == 0 or amount_out >= ideal:
        return 0
    return (ideal - amount_out) * BPS_DENOM // ideal


def quote_swap(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int) -> SwapQuote:
    """
    Quote an exact-in swap.

    Formula:
        net_in = floor(amount_in * (10_000 - fee_bps) / 10_000)
        amount_out = floor(net_in * reserve_out / (reserve_in + net_in))

    Post-swap reserves:
        new_reserve_in = reserve_in + amount_in  (fee stays in pool)
        new_reserve_out = reserve_out - amount_out

    Raises:
        InsufficientLiquidityError: zero input, empty reserves, or zero output
        DomainError: fee_bps outside [0, 10000] or negative inputs
        MathOverflowError: an intermediate product leaves the 256-bit range
    """
    res = _kernel_swap_exact_in(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_in=amount_in,
        fee_bps=fee_bps,
    )
    return SwapQuote(
        amount_out=res.amount_out,
        effective_fee_bps=fee_bps,
        price_impact_bps=_price_impact_bps(amount_in, res.amount_out, reserve_in, reserve_out),
        amount_in=amount_in,
        fee_amount=res.fee_total,
        new_reserve_in=res.new_reserve_in,
        new_reserve_out=res.new_reserve_out,
    )


def quote_swap_exact_out(amount_out: int, reserve_in: int, reserve_out: int, fee_bps: int) -> SwapQuote:
    """
    Quote the minimal gross input that buys `amount_out`.

    Reserves are updated for the requested `amount_out`, not for whatever the
    paid input would yield under exact-in rounding.
    """
    res = _kernel_swap_exact_out(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_out=amount_out,
        fee_bps=fee_bps,
    )
    return SwapQuote(
        amount_out=res.amount_out,
        effective_fee_bps=fee_bps,
        price_impact_bps=_price_impact_bps(res.amount_in, res.amount_out, reserve_in, reserve_out),
        amount_in=res.amount_in,
        fee_amount=res.fee_total,
        new_reserve_in=res.new_reserve_in,
        new_reserve_out=res.new_reserve_out,
    )


def quote_slippage(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    expected_out: int,
    *,
    fee_bps: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> int:
    """
    Shortfall of the realised output against `expected_out`, in bps.

    `fee_bps` defaults to the configured `default_swap_fee_bps`.
    """
    require_u256("expected_out", expected_out)
    if fee_bps is None:
        fee_bps = resolve_config(config).default_swap_fee_bps

    actual_out = quote_swap(amount_in, reserve_in, reserve_out, fee_bps).amount_out
    if actual_out >= expected_out:
        return 0
    return (expected_out - actual_out) * BPS_DENOM // expected_out


def optimize_swap_amount(
    total_amount: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int,
    *,
    max_impact_bps: int,
) -> OptimizationResult:
    """
    Largest input <= `total_amount` whose price impact stays within `max_impact_bps`.

    Bisection on "quote succeeds and impact exceeds the budget"; inputs too
    small to produce output count as within budget for the search and are
    then rejected by the final quote. At most ~256 quotes.

    Returns an all-zero result when no input qualifies.
    """
    require_u256("total_amount", total_amount)
    require_u256("max_impact_bps", max_impact_bps)
    if max_impact_bps > BPS_DENOM:
        raise DomainError(f"max_impact_bps must be in [0, {BPS_DENOM}]: {max_impact_bps}")
    if total_amount == 0:
        raise InsufficientLiquidityError("total_amount must be positive")
    if require_u256("reserve_in", reserve_in) == 0 or require_u256("reserve_out", reserve_out) == 0:
        raise InsufficientLiquidityError(f"cannot quote against an empty reserve: ({reserve_in}, {reserve_out})")

    def _over_budget(amount: int) -> bool:
        try:
            q = quote_swap(amount, reserve_in, reserve_out, fee_bps)
        except InsufficientLiquidityError:
            return False
        return q.price_impact_bps > max_impact_bps

    if not _over_budget(total_amount):
        lo = total_amount
    else:
        # invariant: hi is over budget, lo is not (0 trivially)
        lo, hi = 0, total_amount
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if _over_budget(mid):
                hi = mid
            else:
                lo = mid

    if lo == 0:
        return OptimizationResult(optimal_amount=0, expected_output=0, price_impact_bps=0)
    try:
        q = quote_swap(lo, reserve_in, reserve_out, fee_bps)
    except InsufficientLiquidityError:
        return OptimizationResult(optimal_amount=0, expected_output=0, price_impact_bps=0)
    return OptimizationResult(
        optimal_amount=lo,
        expected_output=q.amount_out,
        price_impact_bps=q.price_impact_bps,
    )
