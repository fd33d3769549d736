"""
Core quoting algorithms
"""

from .cpmm import (
    SwapQuote,
    OptimizationResult,
    quote_swap,
    quote_swap_exact_out,
    quote_slippage,
    optimize_swap_amount,
)
from .liquidity import (
    MINIMUM_LIQUIDITY,
    DepositQuote,
    quote_mint_first_deposit,
    quote_mint_subsequent,
    quote_mint,
    quote_burn,
    quote_optimal_deposit,
)
from .fees import FeeParameters, FeeBreakdown, quote_dynamic_fee, quote_dynamic_fee_breakdown
from .impermanent_loss import (
    quote_impermanent_loss,
    quote_impermanent_loss_bps,
    quote_impermanent_loss_from_reserves,
)
from .routing import RouteHop, RouteQuote, find_best_route, find_best_chained_route, quote_route
from .volatility import estimate_volatility_bps

__all__ = [
    "SwapQuote",
    "OptimizationResult",
    "quote_swap",
    "quote_swap_exact_out",
    "quote_slippage",
    "optimize_swap_amount",
    "MINIMUM_LIQUIDITY",
    "DepositQuote",
    "quote_mint_first_deposit",
    "quote_mint_subsequent",
    "quote_mint",
    "quote_burn",
    "quote_optimal_deposit",
    "FeeParameters",
    "FeeBreakdown",
    "quote_dynamic_fee",
    "quote_dynamic_fee_breakdown",
    "quote_impermanent_loss",
    "quote_impermanent_loss_bps",
    "quote_impermanent_loss_from_reserves",
    "RouteHop",
    "RouteQuote",
    "find_best_route",
    "find_best_chained_route",
    "quote_route",
    "estimate_volatility_bps",
]
