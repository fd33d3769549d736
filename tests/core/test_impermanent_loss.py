from __future__ import annotations

import pytest

from pairmath.core.impermanent_loss import (
    quote_impermanent_loss,
    quote_impermanent_loss_bps,
    quote_impermanent_loss_from_reserves,
)
from pairmath.errors import DomainError, InsufficientLiquidityError
from pairmath.kernels.python.fixed_point import SCALE


@pytest.mark.parametrize("p", [1, 7, SCALE, 3 * SCALE + 11, 10**40])
def test_no_loss_without_price_change(p: int) -> None:
    assert quote_impermanent_loss(p, p) == 0


def test_doubling_price_loses_about_5_7_percent() -> None:
    loss = quote_impermanent_loss(SCALE, 2 * SCALE)
    assert loss > 0
    assert quote_impermanent_loss_bps(SCALE, 2 * SCALE) == 571


def test_loss_is_symmetric_in_ratio() -> None:
    assert quote_impermanent_loss_bps(2 * SCALE, SCALE) == quote_impermanent_loss_bps(SCALE, 2 * SCALE)


def test_loss_grows_with_divergence() -> None:
    losses = [quote_impermanent_loss(SCALE, k * SCALE) for k in (1, 2, 4, 16)]
    assert losses == sorted(losses)
    assert losses[0] == 0


def test_total_loss_when_price_goes_to_zero() -> None:
    assert quote_impermanent_loss(SCALE, 0) == SCALE


def test_zero_initial_price_is_a_domain_error() -> None:
    with pytest.raises(DomainError):
        quote_impermanent_loss(0, SCALE)


def test_loss_from_reserves() -> None:
    assert quote_impermanent_loss_from_reserves(1000, 1000, 1000, 1000) == 0
    # price ratio 4 -> 1 - 2*2/5 = 0.2
    assert quote_impermanent_loss_from_reserves(1000, 1000, 2000, 500) == SCALE // 5
    with pytest.raises(InsufficientLiquidityError):
        quote_impermanent_loss_from_reserves(0, 1000, 1000, 1000)
