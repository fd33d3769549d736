"""
pairmath: pricing and liquidity math for two-asset constant-product pools.

Every function is pure: it takes a reserve/supply snapshot and returns a
quote, or raises one of the errors in `pairmath.errors`.
"""

from .config import EngineConfig, default_config, load_config
from .errors import (
    PairMathError,
    MathOverflowError,
    DomainError,
    InsufficientLiquidityError,
    InsufficientSharesError,
    InsufficientInitialLiquidityError,
)
from .kernels.python.fixed_point import SCALE, U256_MAX, exp, ln, sqrt, sqrt_fixed
from .core import (
    MINIMUM_LIQUIDITY,
    FeeParameters,
    RouteHop,
    RouteQuote,
    SwapQuote,
    find_best_chained_route,
    find_best_route,
    quote_burn,
    quote_dynamic_fee,
    quote_impermanent_loss,
    quote_mint_first_deposit,
    quote_mint_subsequent,
    quote_slippage,
    quote_swap,
)

__all__ = [
    "EngineConfig",
    "default_config",
    "load_config",
    "PairMathError",
    "MathOverflowError",
    "DomainError",
    "InsufficientLiquidityError",
    "InsufficientSharesError",
    "InsufficientInitialLiquidityError",
    "SCALE",
    "U256_MAX",
    "sqrt",
    "sqrt_fixed",
    "exp",
    "ln",
    "MINIMUM_LIQUIDITY",
    "FeeParameters",
    "RouteHop",
    "RouteQuote",
    "SwapQuote",
    "quote_swap",
    "quote_slippage",
    "quote_mint_first_deposit",
    "quote_mint_subsequent",
    "quote_burn",
    "quote_dynamic_fee",
    "quote_impermanent_loss",
    "find_best_route",
    "find_best_chained_route",
]
