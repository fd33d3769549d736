"""Impermanent loss estimation.

IL is defined as a non-negative loss:
  IL = 1 - 2 * sqrt(r) / (1 + r)

Where r = current_price / initial_price. IL is 0 when r = 1 and strictly
positive otherwise (AM-GM). Results are 1e18-scaled fractions unless the
function name says bps.

All operations use integer arithmetic with explicit floor division.
"""

from __future__ import annotations

from ..errors import DomainError, InsufficientLiquidityError
from ..kernels.python.fixed_point import BPS_DENOM, SCALE, checked_add, checked_mul, mul_div, require_u256, sqrt_fixed


def _loss_from_ratio(r_scaled: int) -> int:
    # value ratio of the pooled position vs holding: 2 * sqrt(r) / (1 + r)
    sqrt_r = sqrt_fixed(r_scaled)
    value_ratio = mul_div(2 * sqrt_r, SCALE, checked_add(SCALE, r_scaled))
    if value_ratio >= SCALE:
        return 0
    return SCALE - value_ratio


def quote_impermanent_loss(initial_price: int, current_price: int) -> int:
    """Loss fraction (1e18 = 100%) after the price moved from `initial_price` to `current_price`."""
    require_u256("initial_price", initial_price)
    require_u256("current_price", current_price)
    if initial_price == 0:
        raise DomainError("initial_price must be positive")
    return _loss_from_ratio(mul_div(current_price, SCALE, initial_price))


def quote_impermanent_loss_bps(initial_price: int, current_price: int) -> int:
    """Same as `quote_impermanent_loss`, in basis points (floor)."""
    return mul_div(quote_impermanent_loss(initial_price, current_price), BPS_DENOM, SCALE)


def quote_impermanent_loss_from_reserves(
    reserve_a_before: int,
    reserve_b_before: int,
    reserve_a_after: int,
    reserve_b_after: int,
) -> int:
    """
    Loss fraction implied by two reserve snapshots of the same pool.

    price_ratio = (a_after / b_after) / (a_before / b_before)
                = (a_after * b_before) / (a_before * b_after)
    """
    for name, v in (
        ("reserve_a_before", reserve_a_before),
        ("reserve_b_before", reserve_b_before),
        ("reserve_a_after", reserve_a_after),
        ("reserve_b_after", reserve_b_after),
    ):
        if require_u256(name, v) == 0:
            raise InsufficientLiquidityError(f"{name} must be positive")

    numerator = checked_mul(reserve_a_after, reserve_b_before)
    denominator = checked_mul(reserve_a_before, reserve_b_after)
    return _loss_from_ratio(mul_div(numerator, SCALE, denominator))
