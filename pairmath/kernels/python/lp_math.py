"""
Liquidity math kernel.

Pure functions with explicit rounding rules:
- first deposit mints the geometric mean minus a permanently locked floor,
- later deposits mint the smaller of the two proportional claims,
- burns return strictly proportional amounts (floor).
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import (
    InsufficientInitialLiquidityError,
    InsufficientLiquidityError,
    InsufficientSharesError,
)
from .fixed_point import checked_mul, mul_div, require_u256, sqrt


MINIMUM_LIQUIDITY = 1000


@dataclass(frozen=True)
class OptimalLiquidityResult:
    amount0_used: int
    amount1_used: int
    amount0_refund: int
    amount1_refund: int


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount0_out: int
    amount1_out: int


def optimal_liquidity(
    *,
    reserve0: int,
    reserve1: int,
    amount0_desired: int,
    amount1_desired: int,
) -> OptimalLiquidityResult:
    """
    Compute ratio-preserving used amounts and refunds.

    For an empty pool (reserve0 == 0 or reserve1 == 0), uses everything and refunds nothing.
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("amount0_desired", amount0_desired),
        ("amount1_desired", amount1_desired),
    ):
        require_u256(name, v)
    if amount0_desired == 0 or amount1_desired == 0:
        raise InsufficientLiquidityError("desired amounts must be positive")

    if reserve0 == 0 or reserve1 == 0:
        return OptimalLiquidityResult(
            amount0_used=amount0_desired,
            amount1_used=amount1_desired,
            amount0_refund=0,
            amount1_refund=0,
        )

    amount1_from_amount0 = mul_div(amount0_desired, reserve1, reserve0)
    if amount1_from_amount0 <= amount1_desired:
        amount0_used = amount0_desired
        amount1_used = amount1_from_amount0
    else:
        amount0_used = mul_div(amount1_desired, reserve0, reserve1)
        amount1_used = amount1_desired

    if amount0_used == 0 or amount1_used == 0:
        raise InsufficientLiquidityError("deposit too small for the pool ratio")
    if amount0_used > amount0_desired or amount1_used > amount1_desired:
        raise AssertionError("used amounts exceed desired amounts")

    return OptimalLiquidityResult(
        amount0_used=amount0_used,
        amount1_used=amount1_used,
        amount0_refund=amount0_desired - amount0_used,
        amount1_refund=amount1_desired - amount1_used,
    )


def mint_liquidity_initial(*, amount0: int, amount1: int, min_lp_lock: int = MINIMUM_LIQUIDITY) -> tuple[int, int]:
    """
    Initial liquidity mint (pool creation).

    Returns (liquidity_minted_to_depositor, total_supply_including_lock).
    """
    require_u256("amount0", amount0)
    require_u256("amount1", amount1)

    sqrt_product = sqrt(checked_mul(amount0, amount1))
    if sqrt_product <= min_lp_lock:
        raise InsufficientInitialLiquidityError(
            f"insufficient initial liquidity: sqrt(amount0*amount1) = {sqrt_product} <= {min_lp_lock}"
        )
    return sqrt_product - min_lp_lock, sqrt_product


def mint_liquidity(*, reserve0: int, reserve1: int, total_supply: int, amount0: int, amount1: int) -> int:
    """
    Shares minted for a deposit into a live pool (Uniswap-v2 style).

    `total_supply` includes the locked minimum.
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_supply", total_supply),
        ("amount0", amount0),
        ("amount1", amount1),
    ):
        require_u256(name, v)

    if reserve0 == 0 or reserve1 == 0 or total_supply == 0:
        raise InsufficientLiquidityError("pool is empty; only the first-deposit path applies")

    liquidity0 = mul_div(amount0, total_supply, reserve0)
    liquidity1 = mul_div(amount1, total_supply, reserve1)
    minted = min(liquidity0, liquidity1)
    if minted == 0:
        raise InsufficientLiquidityError("liquidity_minted is zero (deposit too small)")
    return minted


def burn_liquidity(*, lp_amount: int, reserve0: int, reserve1: int, total_supply: int) -> BurnLiquidityResult:
    """
    Burn LP tokens for underlying assets (floor rounding).
    """
    for name, v in (
        ("lp_amount", lp_amount),
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_supply", total_supply),
    ):
        require_u256(name, v)

    if lp_amount == 0:
        raise InsufficientSharesError("lp_amount must be positive")
    if lp_amount > total_supply:
        raise InsufficientSharesError(f"cannot burn more than total_supply: {lp_amount} > {total_supply}")

    return BurnLiquidityResult(
        amount0_out=mul_div(lp_amount, reserve0, total_supply),
        amount1_out=mul_div(lp_amount, reserve1, total_supply),
    )
