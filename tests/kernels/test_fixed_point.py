from __future__ import annotations

import pytest

from pairmath.errors import DomainError, MathOverflowError
from pairmath.kernels.python.fixed_point import (
    E_SCALED,
    EXP_MAX_INPUT,
    LN2_SCALED,
    SCALE,
    U256_MAX,
    checked_add,
    checked_mul,
    exp,
    ln,
    mul_div,
    sqrt,
    sqrt_fixed,
)


# ---------------------------------------------------------------------------
# sqrt
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "x,expected",
    [(0, 0), (1, 1), (3, 1), (4, 2), (9, 3), (15, 3), (16, 4), (625, 25), (1_000_000, 1000)],
)
def test_sqrt_small_values(x: int, expected: int) -> None:
    assert sqrt(x) == expected


def test_sqrt_of_max_u256() -> None:
    assert sqrt(U256_MAX) == (1 << 128) - 1


def test_sqrt_exact_for_large_square() -> None:
    # Float sqrt would be off here due to precision loss.
    n = (1 << 70) + 12345
    assert sqrt(n * n) == n
    assert sqrt(n * n - 1) == n - 1


def test_sqrt_fixed_scales_the_root() -> None:
    assert sqrt_fixed(4 * SCALE) == 2 * SCALE
    assert sqrt_fixed(2 * SCALE) == 1_414_213_562_373_095_048


def test_sqrt_rejects_out_of_domain_inputs() -> None:
    with pytest.raises(DomainError):
        sqrt(-1)
    with pytest.raises(MathOverflowError):
        sqrt(U256_MAX + 1)
    with pytest.raises(TypeError):
        sqrt(True)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# exp
# ---------------------------------------------------------------------------

def test_exp_zero_is_one() -> None:
    assert exp(0) == SCALE


def test_exp_one_is_e_within_truncation() -> None:
    # Every Taylor term is floored, so the result never exceeds the true value.
    e1 = exp(SCALE)
    assert E_SCALED - 50 <= e1 <= E_SCALED


def test_exp_is_monotone_on_a_sweep() -> None:
    xs = [0, 1, SCALE // 3, SCALE // 2, SCALE, 3 * SCALE // 2, 5 * SCALE, 20 * SCALE]
    values = [exp(x) for x in xs]
    assert values == sorted(values)


def test_exp_accepts_max_input_and_rejects_beyond() -> None:
    assert exp(EXP_MAX_INPUT) > 0
    with pytest.raises(MathOverflowError):
        exp(EXP_MAX_INPUT + 1)


# ---------------------------------------------------------------------------
# ln
# ---------------------------------------------------------------------------

def test_ln_exact_points() -> None:
    assert ln(SCALE) == 0
    assert ln(2 * SCALE) == LN2_SCALED
    assert ln(4 * SCALE) == 2 * LN2_SCALED
    assert ln(SCALE // 2) == -LN2_SCALED


def test_ln_of_e_is_one() -> None:
    assert abs(ln(E_SCALED) - SCALE) <= 100


def test_ln_inverts_exp() -> None:
    for x in (SCALE // 10, SCALE, 3 * SCALE, 10 * SCALE):
        assert abs(ln(exp(x)) - x) <= 10_000


def test_ln_is_negative_below_one() -> None:
    assert ln(SCALE // 10) < 0
    assert ln(1) < ln(2)


@pytest.mark.parametrize("x", [0, -1, -SCALE])
def test_ln_rejects_non_positive(x: int) -> None:
    with pytest.raises(DomainError):
        ln(x)


# ---------------------------------------------------------------------------
# checked arithmetic
# ---------------------------------------------------------------------------

def test_checked_ops_fail_instead_of_growing() -> None:
    assert checked_add(U256_MAX - 1, 1) == U256_MAX
    with pytest.raises(MathOverflowError):
        checked_add(U256_MAX, 1)
    with pytest.raises(MathOverflowError):
        checked_mul(1 << 200, 1 << 100)


def test_mul_div() -> None:
    assert mul_div(100, 200, 50) == 400
    assert mul_div(SCALE, 2, SCALE) == 2
    assert mul_div(7, 1, 2) == 3
    with pytest.raises(DomainError):
        mul_div(1, 1, 0)
    with pytest.raises(MathOverflowError):
        mul_div(U256_MAX, 2, 3)
