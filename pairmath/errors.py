"""Exception types for the pairmath quoting engine.

Every operation either returns a complete result or raises one of these.
``kind`` carries the stable error name callers can switch on.
"""

from __future__ import annotations


class PairMathError(Exception):
    """Base class for all engine errors."""

    kind = "PairMathError"


class MathOverflowError(PairMathError, ArithmeticError):
    """Raised when an arithmetic step would leave the unsigned 256-bit range."""

    kind = "Overflow"


class DomainError(PairMathError, ValueError):
    """Raised when an input is outside a function's valid domain."""

    kind = "DomainError"


class InsufficientLiquidityError(PairMathError, ValueError):
    """Raised when zero or near-zero reserves or amounts make a quote meaningless."""

    kind = "InsufficientLiquidity"


class InsufficientSharesError(PairMathError, ValueError):
    """Raised when a burn request is zero or exceeds the outstanding supply."""

    kind = "InsufficientShares"


class InsufficientInitialLiquidityError(PairMathError, ValueError):
    """Raised when a first deposit cannot clear the minimum-liquidity floor."""

    kind = "InsufficientInitialLiquidity"
