"""
CPMM swap kernel.

Semantics:
- Fee is charged on the *gross* input amount using ceil rounding, so
  `net_in = gross_in - ceil(gross_in * fee_bps / 10_000)`, which equals
  `floor(gross_in * (10_000 - fee_bps) / 10_000)`.
- Pricing uses `amount_out = floor(reserve_out * net_in / (reserve_in + net_in))`.
- The whole gross input (fee included) stays in the pool.

Every product is checked against the 256-bit range. The invariant
comparison `k_after >= k_before` is evaluated on exact integers: it is a
verification of the quote, not part of the quote.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import DomainError, InsufficientLiquidityError
from .fixed_point import BPS_DENOM, ceil_div, checked_add, checked_mul, require_u256


@dataclass(frozen=True)
class SwapExactInResult:
    amount_out: int
    fee_total: int
    net_in: int
    gross_in: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


@dataclass(frozen=True)
class SwapExactOutResult:
    amount_in: int
    amount_out: int
    fee_total: int
    net_in: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def require_fee_bps(fee_bps: int) -> int:
    require_u256("fee_bps", fee_bps)
    if fee_bps > BPS_DENOM:
        raise DomainError(f"fee_bps must be in [0, {BPS_DENOM}]: {fee_bps}")
    return fee_bps


def compute_fee_total(*, gross_in: int, fee_bps: int) -> int:
    """
    Compute `fee_total = ceil(gross_in * fee_bps / 10_000)`.
    """
    require_u256("gross_in", gross_in)
    require_fee_bps(fee_bps)
    return ceil_div(checked_mul(gross_in, fee_bps), BPS_DENOM)


def _require_pool(reserve_in: int, reserve_out: int) -> None:
    require_u256("reserve_in", reserve_in)
    require_u256("reserve_out", reserve_out)
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidityError(
            f"cannot quote against an empty reserve: ({reserve_in}, {reserve_out})"
        )


def swap_exact_in(*, reserve_in: int, reserve_out: int, amount_in: int, fee_bps: int) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    Raises InsufficientLiquidityError on empty reserves, a zero input, or a
    trade too small to produce any output.
    """
    _require_pool(reserve_in, reserve_out)
    require_u256("amount_in", amount_in)
    require_fee_bps(fee_bps)
    if amount_in == 0:
        raise InsufficientLiquidityError("amount_in must be positive")

    fee_total = compute_fee_total(gross_in=amount_in, fee_bps=fee_bps)
    net_in = amount_in - fee_total

    denominator = checked_add(reserve_in, net_in)
    amount_out = checked_mul(reserve_out, net_in) // denominator
    if amount_out == 0:
        raise InsufficientLiquidityError("amount_out is zero (trade too small)")
    if amount_out >= reserve_out:
        raise AssertionError("amount_out drains reserve_out")

    new_reserve_in = checked_add(reserve_in, amount_in)
    new_reserve_out = reserve_out - amount_out

    k_before = reserve_in * reserve_out
    k_after = new_reserve_in * new_reserve_out
    if k_after < k_before:
        raise AssertionError(f"Invariant violation: new_k ({k_after}) < old_k ({k_before})")

    return SwapExactInResult(
        amount_out=amount_out,
        fee_total=fee_total,
        net_in=net_in,
        gross_in=amount_in,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )


def swap_exact_out(*, reserve_in: int, reserve_out: int, amount_out: int, fee_bps: int) -> SwapExactOutResult:
    """Minimal gross input that buys at least `amount_out` (ceil rounding throughout)."""
    _require_pool(reserve_in, reserve_out)
    require_u256("amount_out", amount_out)
    require_fee_bps(fee_bps)
    if amount_out == 0:
        raise InsufficientLiquidityError("amount_out must be positive")
    if amount_out >= reserve_out:
        raise InsufficientLiquidityError(
            f"cannot drain full reserve: amount_out ({amount_out}) >= reserve_out ({reserve_out})"
        )
    if fee_bps == BPS_DENOM:
        raise DomainError("cannot buy output with a 100% fee")

    # net_in = ceil(reserve_in * amount_out / (reserve_out - amount_out))
    net_required = ceil_div(checked_mul(reserve_in, amount_out), reserve_out - amount_out)
    # amount_in = ceil(net_in * 10_000 / (10_000 - fee_bps))
    amount_in = ceil_div(checked_mul(net_required, BPS_DENOM), BPS_DENOM - fee_bps)

    fee_total = compute_fee_total(gross_in=amount_in, fee_bps=fee_bps)
    net_in = amount_in - fee_total
    quoted = checked_mul(reserve_out, net_in) // checked_add(reserve_in, net_in)
    if quoted < amount_out:
        raise AssertionError("computed amount_in insufficient for desired amount_out")

    new_reserve_in = checked_add(reserve_in, amount_in)
    new_reserve_out = reserve_out - amount_out
    k_before = reserve_in * reserve_out
    k_after = new_reserve_in * new_reserve_out
    if k_after < k_before:
        raise AssertionError(f"Invariant violation: new_k ({k_after}) < old_k ({k_before})")

    return SwapExactOutResult(
        amount_in=amount_in,
        amount_out=amount_out,
        fee_total=fee_total,
        net_in=net_in,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )
