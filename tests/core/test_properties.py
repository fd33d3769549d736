"""Randomised checks of the pool invariants."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from pairmath.config import EngineConfig
from pairmath.core.cpmm import quote_swap
from pairmath.core.fees import FeeParameters, quote_dynamic_fee
from pairmath.core.liquidity import MINIMUM_LIQUIDITY, quote_burn, quote_mint_first_deposit
from pairmath.errors import InsufficientLiquidityError
from pairmath.kernels.python.fixed_point import sqrt

AMOUNTS = st.integers(min_value=1, max_value=10**30)


@settings(max_examples=300, deadline=None)
@given(x=st.integers(min_value=0, max_value=2**128 - 1))
def test_sqrt_of_square(x: int) -> None:
    assert sqrt(x * x) == x
    if x > 0:
        assert sqrt(x * x - 1) == x - 1


@settings(max_examples=300, deadline=None)
@given(a=st.integers(min_value=0, max_value=2**256 - 1), b=st.integers(min_value=0, max_value=2**256 - 1))
def test_sqrt_monotone(a: int, b: int) -> None:
    lo, hi = min(a, b), max(a, b)
    assert sqrt(lo) <= sqrt(hi)


@settings(max_examples=300, deadline=None)
@given(reserve_in=AMOUNTS, reserve_out=AMOUNTS, amount_in=AMOUNTS, fee_bps=st.integers(min_value=0, max_value=9_999))
def test_swap_never_decreases_k(reserve_in: int, reserve_out: int, amount_in: int, fee_bps: int) -> None:
    try:
        q = quote_swap(amount_in, reserve_in, reserve_out, fee_bps)
    except InsufficientLiquidityError:
        assume(False)
        return
    assert 0 < q.amount_out < reserve_out
    assert q.new_reserve_in * q.new_reserve_out >= reserve_in * reserve_out


@settings(max_examples=200, deadline=None)
@given(
    curve=st.sampled_from(["linear", "exponential"]),
    vol=st.integers(min_value=0, max_value=2**255),
    bump=st.integers(min_value=0, max_value=10**7),
    volume=st.integers(min_value=0, max_value=10**24),
    depth=st.integers(min_value=0, max_value=10**24),
)
def test_fee_bounded_and_monotone(curve: str, vol: int, bump: int, volume: int, depth: int) -> None:
    cfg = EngineConfig(fee_curve=curve)
    lo = quote_dynamic_fee(FeeParameters(volume, depth, vol), config=cfg)
    hi = quote_dynamic_fee(FeeParameters(volume, depth, vol + bump), config=cfg)
    assert cfg.base_fee_bps <= lo <= hi <= cfg.max_fee_bps


@settings(max_examples=200, deadline=None)
@given(a=st.integers(min_value=10**4, max_value=10**30), b=st.integers(min_value=10**4, max_value=10**30))
def test_first_deposit_burn_never_returns_more(a: int, b: int) -> None:
    shares = quote_mint_first_deposit(a, b)
    total = shares + MINIMUM_LIQUIDITY
    out_a, out_b = quote_burn(shares, a, b, total)
    assert out_a <= a and out_b <= b
    # burning the whole supply, locked shares included, returns the deposit exactly
    assert quote_burn(total, a, b, total) == (a, b)
