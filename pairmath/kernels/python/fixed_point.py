"""
Fixed-point math kernel (18 decimals, unsigned 256-bit domain).

Values are plain Python ints interpreted with an implicit scale of 1e18.
Python ints never wrap, so the 256-bit bound is enforced explicitly:
every product that can leave the range goes through `checked_mul`/`mul_div`
and raises MathOverflowError instead of silently growing.

Algorithms:
- sqrt: Newton-Raphson from a bit-length guess (floor semantics).
- exp: truncated Taylor series, monotone non-decreasing in its input.
- ln: power-of-two range reduction + atanh series on [1, 2).
"""

from __future__ import annotations

from ...errors import DomainError, MathOverflowError


SCALE = 10**18
U256_MAX = (1 << 256) - 1
BPS_DENOM = 10_000

LN2_SCALED = 693_147_180_559_945_309  # ln(2) * 1e18
E_SCALED = 2_718_281_828_459_045_235  # e * 1e18

# Newton from a guess >= sqrt(x) converges in <= 8 steps for 256-bit inputs.
MAX_SQRT_ITERATIONS = 16
# Enough terms for exp(EXP_MAX_INPUT) to fall below one unit.
MAX_EXP_TERMS = 400
MAX_LN_TERMS = 48

# exp(90) * 1e18 and the largest Taylor term times x both fit in 256 bits.
EXP_MAX_INPUT = 90 * SCALE

FixedPointValue = int


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u256(name: str, value: int) -> int:
    """Validate an unsigned 256-bit input and return it unchanged."""
    _require_int(name, value)
    if value < 0:
        raise DomainError(f"{name} must be non-negative: {value}")
    if value > U256_MAX:
        raise MathOverflowError(f"{name} exceeds the 256-bit range")
    return value


def checked_add(a: int, b: int) -> int:
    out = a + b
    if out > U256_MAX:
        raise MathOverflowError(f"addition overflows 256 bits: {a} + {b}")
    return out


def checked_mul(a: int, b: int) -> int:
    out = a * b
    if out > U256_MAX:
        raise MathOverflowError(f"multiplication overflows 256 bits: {a} * {b}")
    return out


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator) with the product checked against 256 bits."""
    if denominator <= 0:
        raise DomainError("denominator must be positive")
    return checked_mul(a, b) // denominator


def ceil_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise DomainError("denominator must be positive")
    if numerator < 0:
        raise DomainError("numerator must be non-negative")
    return (numerator + denominator - 1) // denominator


def sqrt(x: FixedPointValue) -> FixedPointValue:
    """
    Integer square root, floor(sqrt(x)).

    The initial guess 2**ceil(bits/2) is always >= sqrt(x), so the Newton
    sequence is non-increasing until it reaches the floor root; the first
    non-decreasing step marks convergence.
    """
    require_u256("x", x)
    if x == 0:
        return 0

    y = 1 << ((x.bit_length() + 1) // 2)
    for _ in range(MAX_SQRT_ITERATIONS):
        y_next = (y + x // y) // 2
        if y_next >= y:
            break
        y = y_next
    else:
        raise AssertionError("sqrt did not converge")

    if not (y * y <= x < (y + 1) * (y + 1)):
        raise AssertionError(f"sqrt postcondition failed for {x}")
    return y


def sqrt_fixed(x: FixedPointValue) -> FixedPointValue:
    """Square root of a scaled value: sqrt(x / 1e18) * 1e18."""
    return sqrt(checked_mul(require_u256("x", x), SCALE))


def exp(x: FixedPointValue) -> FixedPointValue:
    """
    e**x on the 1e18 scale via the Taylor series 1 + x + x^2/2! + ...

    Each term is floor(prev * x / (i * 1e18)); every step is monotone in x,
    so the sum is monotone non-decreasing. The series stops once a term
    rounds to zero.
    """
    require_u256("x", x)
    if x == 0:
        return SCALE
    if x > EXP_MAX_INPUT:
        raise MathOverflowError(f"exp input too large: {x} > {EXP_MAX_INPUT}")

    total = SCALE
    term = SCALE
    for i in range(1, MAX_EXP_TERMS + 1):
        term = mul_div(term, x, i * SCALE)
        if term == 0:
            break
        total = checked_add(total, term)
    return total


def _reduce_pow2(x: int) -> tuple[int, int, int]:
    """
    Find n with 2**n <= x / 1e18 < 2**(n+1).

    Returns (n, a, d) where a / d == x / (1e18 * 2**n) lies in [1, 2).
    """
    n = x.bit_length() - SCALE.bit_length()
    while True:
        if n >= 0:
            a, d = x, SCALE << n
        else:
            a, d = x << -n, SCALE
        if a < d:
            n -= 1
        elif a >= 2 * d:
            n += 1
        else:
            return n, a, d


def ln(x: FixedPointValue) -> int:
    """
    Natural logarithm on the 1e18 scale.

    Returns a signed int: negative for x < 1e18. Raises DomainError for x <= 0.
    """
    _require_int("x", x)
    if x <= 0:
        raise DomainError(f"ln is undefined for non-positive input: {x}")
    require_u256("x", x)
    if x == SCALE:
        return 0

    n, a, d = _reduce_pow2(x)

    # ln(y) = 2 * atanh(z), z = (y - 1) / (y + 1) in [0, 1/3)
    z = ((a - d) * SCALE) // (a + d)
    z2 = (z * z) // SCALE
    series = 0
    term = z
    for k in range(MAX_LN_TERMS):
        if term == 0:
            break
        series += term // (2 * k + 1)
        term = (term * z2) // SCALE

    return 2 * series + n * LN2_SCALED
