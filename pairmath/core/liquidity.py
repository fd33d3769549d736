"""
Liquidity share accounting: mint on deposit, burn on withdrawal.

The engine never holds pool state. Callers pass the reserve/supply snapshot
and apply the returned deltas themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..kernels.python.lp_math import MINIMUM_LIQUIDITY
from ..kernels.python.lp_math import burn_liquidity as _kernel_burn_liquidity
from ..kernels.python.lp_math import mint_liquidity as _kernel_mint_liquidity
from ..kernels.python.lp_math import mint_liquidity_initial as _kernel_mint_liquidity_initial
from ..kernels.python.lp_math import optimal_liquidity as _kernel_optimal_liquidity
from ..kernels.python.fixed_point import require_u256


@dataclass(frozen=True)
class DepositQuote:
    amount_a_used: int
    amount_b_used: int
    amount_a_refund: int
    amount_b_refund: int


def quote_mint_first_deposit(amount_a: int, amount_b: int) -> int:
    """
    Shares for the deposit that creates a pool.

    Formula:
        shares = floor(sqrt(amount_a * amount_b)) - MINIMUM_LIQUIDITY

    The caller retires MINIMUM_LIQUIDITY shares permanently, so the supply
    after creation is `shares + MINIMUM_LIQUIDITY`.

    Raises:
        InsufficientInitialLiquidityError: sqrt(amount_a * amount_b) <= MINIMUM_LIQUIDITY
    """
    minted, _total_supply = _kernel_mint_liquidity_initial(amount0=amount_a, amount1=amount_b)
    return minted


def quote_mint_subsequent(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> int:
    """
    Shares for a deposit into a live pool.

    Formula:
        shares = min(floor(amount_a * total_shares / reserve_a),
                     floor(amount_b * total_shares / reserve_b))

    Taking the minimum caps the mint at the scarcer-contributed side; a
    deposit that matches the reserve ratio loses nothing to it.
    """
    return _kernel_mint_liquidity(
        reserve0=reserve_a,
        reserve1=reserve_b,
        total_supply=total_shares,
        amount0=amount_a,
        amount1=amount_b,
    )


def quote_mint(amount_a: int, amount_b: int, reserve_a: int, reserve_b: int, total_shares: int) -> int:
    """Dispatch to the first-deposit path when no shares exist yet."""
    if require_u256("total_shares", total_shares) == 0:
        return quote_mint_first_deposit(amount_a, amount_b)
    return quote_mint_subsequent(amount_a, amount_b, reserve_a, reserve_b, total_shares)


def quote_burn(shares: int, reserve_a: int, reserve_b: int, total_shares: int) -> Tuple[int, int]:
    """
    Assets returned for burning `shares`.

    Formula:
        amount_x = floor(shares * reserve_x / total_shares)

    Raises:
        InsufficientSharesError: shares == 0 or shares > total_shares
    """
    res = _kernel_burn_liquidity(
        lp_amount=shares,
        reserve0=reserve_a,
        reserve1=reserve_b,
        total_supply=total_shares,
    )
    return res.amount0_out, res.amount1_out


def quote_optimal_deposit(
    amount_a_desired: int,
    amount_b_desired: int,
    reserve_a: int,
    reserve_b: int,
) -> DepositQuote:
    """
    Ratio-preserving amounts to actually deposit, plus refunds.

    Feeding the used amounts to `quote_mint_subsequent` mints the maximum
    shares obtainable from the desired amounts.
    """
    opt = _kernel_optimal_liquidity(
        reserve0=reserve_a,
        reserve1=reserve_b,
        amount0_desired=amount_a_desired,
        amount1_desired=amount_b_desired,
    )
    return DepositQuote(
        amount_a_used=opt.amount0_used,
        amount_b_used=opt.amount1_used,
        amount_a_refund=opt.amount0_refund,
        amount_b_refund=opt.amount1_refund,
    )


__all__ = [
    "MINIMUM_LIQUIDITY",
    "DepositQuote",
    "quote_mint_first_deposit",
    "quote_mint_subsequent",
    "quote_mint",
    "quote_burn",
    "quote_optimal_deposit",
]
