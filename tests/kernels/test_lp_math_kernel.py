from __future__ import annotations

import pytest

from pairmath.errors import InsufficientInitialLiquidityError, InsufficientLiquidityError, InsufficientSharesError
from pairmath.kernels.python.lp_math import (
    MINIMUM_LIQUIDITY,
    burn_liquidity,
    mint_liquidity,
    mint_liquidity_initial,
    optimal_liquidity,
)


def test_initial_mint_returns_minted_and_total_supply() -> None:
    minted, total = mint_liquidity_initial(amount0=4_000_000, amount1=9_000_000)
    assert total == 6_000_000
    assert minted == total - MINIMUM_LIQUIDITY


def test_initial_mint_requires_clearing_the_lock() -> None:
    with pytest.raises(InsufficientInitialLiquidityError):
        mint_liquidity_initial(amount0=1000, amount1=1000)
    minted, _ = mint_liquidity_initial(amount0=1001, amount1=1001)
    assert minted == 1


def test_mint_rejects_empty_pool() -> None:
    with pytest.raises(InsufficientLiquidityError, match="first-deposit"):
        mint_liquidity(reserve0=0, reserve1=0, total_supply=0, amount0=10, amount1=10)


def test_burn_bounds() -> None:
    with pytest.raises(InsufficientSharesError):
        burn_liquidity(lp_amount=0, reserve0=10, reserve1=10, total_supply=10)
    with pytest.raises(InsufficientSharesError):
        burn_liquidity(lp_amount=11, reserve0=10, reserve1=10, total_supply=10)


def test_optimal_liquidity_refunds_excess_side() -> None:
    res = optimal_liquidity(reserve0=1000, reserve1=2000, amount0_desired=100, amount1_desired=100)
    assert (res.amount0_used, res.amount1_used) == (50, 100)
    assert (res.amount0_refund, res.amount1_refund) == (50, 0)


def test_optimal_liquidity_empty_pool_uses_everything() -> None:
    res = optimal_liquidity(reserve0=0, reserve1=0, amount0_desired=7, amount1_desired=9)
    assert (res.amount0_used, res.amount1_used, res.amount0_refund, res.amount1_refund) == (7, 9, 0, 0)
