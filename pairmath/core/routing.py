"""
Deterministic swap routing across candidate pools.

Two searches are provided:
- `find_best_route`: every hop is quoted independently from the same input;
  the best single hop wins.
- `find_best_chained_route`: depth-first search over sequences of distinct
  hops, each fed the previous hop's output, bounded by `max_hops`.

A hop carries reserves, a fee and optional asset tags. Tagged hops only
chain when hop i's `asset_out` equals hop i+1's `asset_in`; untagged hops
chain freely and it is the caller's job to list legs whose assets connect.

Determinism:
- Single-hop ties go to the lowest index.
- Chained ties are broken by (hop_count, path) lexicographically.

Complexity:
- `find_best_route`: O(H) quotes.
- `find_best_chained_route`: O(H^max_hops) quotes, max_hops <= MAX_ROUTE_HOPS.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..config import MAX_ROUTE_HOPS, EngineConfig, resolve_config
from ..errors import DomainError, InsufficientLiquidityError
from ..kernels.python.fixed_point import require_u256
from .cpmm import quote_swap


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteHop:
    pool_reserve_in: int
    pool_reserve_out: int
    fee_bps: int
    # Optional asset tags; when set, chained routes only link matching legs.
    asset_in: Optional[str] = None
    asset_out: Optional[str] = None


@dataclass(frozen=True)
class RouteQuote:
    path: Tuple[int, ...]
    amount_in: int
    amount_out: int
    # amount entering each hop, then the final output: len(path) + 1 entries
    amounts: Tuple[int, ...]


def _quote_hop(hop: RouteHop, amount_in: int) -> Optional[int]:
    try:
        return quote_swap(amount_in, hop.pool_reserve_in, hop.pool_reserve_out, hop.fee_bps).amount_out
    except InsufficientLiquidityError as exc:
        logger.debug("hop %s is not a candidate for amount_in=%d: %s", hop, amount_in, exc)
        return None


def find_best_route(amount_in: int, hops: Sequence[RouteHop]) -> Tuple[int, int]:
    """
    Pick the single hop with the largest output for `amount_in`.

    Returns (selected_hop_index, amount_out).

    Raises:
        InsufficientLiquidityError: no hop can quote this input
    """
    require_u256("amount_in", amount_in)
    if amount_in == 0:
        raise InsufficientLiquidityError("amount_in must be positive")

    best: Optional[Tuple[int, int]] = None
    for i, hop in enumerate(hops):
        out = _quote_hop(hop, amount_in)
        if out is None:
            continue
        if best is None or out > best[1]:
            best = (i, out)

    if best is None:
        raise InsufficientLiquidityError(f"no route can quote amount_in={amount_in} across {len(hops)} hop(s)")
    return best


def quote_route(amount_in: int, hops: Sequence[RouteHop]) -> int:
    """Pass `amount_in` through every hop in order and return the final output."""
    if not hops:
        raise DomainError("route must contain at least one hop")
    amount = amount_in
    for hop in hops:
        amount = quote_swap(amount, hop.pool_reserve_in, hop.pool_reserve_out, hop.fee_bps).amount_out
    return amount


def _route_key(q: RouteQuote) -> Tuple[int, Tuple[int, ...]]:
    # Prefer fewer sequential hops, then the lexicographically smaller path.
    return (len(q.path), q.path)


def _links(prev: Optional[RouteHop], nxt: RouteHop, asset_in: Optional[str]) -> bool:
    want = asset_in if prev is None else prev.asset_out
    return want is None or nxt.asset_in is None or want == nxt.asset_in


def find_best_chained_route(
    amount_in: int,
    hops: Sequence[RouteHop],
    *,
    asset_in: Optional[str] = None,
    asset_out: Optional[str] = None,
    max_hops: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> RouteQuote:
    """
    Best sequence of distinct hops (length 1..max_hops) for `amount_in`.

    When `asset_in`/`asset_out` are given, tagged hops must start from and
    end at those assets. `max_hops` defaults to the configured
    `max_route_hops` and may not exceed MAX_ROUTE_HOPS.
    """
    require_u256("amount_in", amount_in)
    if amount_in == 0:
        raise InsufficientLiquidityError("amount_in must be positive")
    depth = resolve_config(config).max_route_hops if max_hops is None else max_hops
    if not (1 <= depth <= MAX_ROUTE_HOPS):
        raise DomainError(f"max_hops must be in [1, {MAX_ROUTE_HOPS}]: {depth}")

    best: Optional[RouteQuote] = None
    path: List[int] = []
    amounts: List[int] = [amount_in]

    def _visit() -> None:
        nonlocal best
        if path:
            last = hops[path[-1]]
            ends_ok = asset_out is None or last.asset_out is None or last.asset_out == asset_out
            q = RouteQuote(path=tuple(path), amount_in=amount_in, amount_out=amounts[-1], amounts=tuple(amounts))
            if ends_ok and (
                best is None
                or q.amount_out > best.amount_out
                or (q.amount_out == best.amount_out and _route_key(q) < _route_key(best))
            ):
                best = q
        if len(path) >= depth:
            return
        prev = hops[path[-1]] if path else None
        for i, hop in enumerate(hops):
            if i in path or not _links(prev, hop, asset_in):
                continue
            out = _quote_hop(hop, amounts[-1])
            if out is None:
                continue
            path.append(i)
            amounts.append(out)
            _visit()
            path.pop()
            amounts.pop()

    _visit()

    if best is None:
        raise InsufficientLiquidityError(f"no route can quote amount_in={amount_in} across {len(hops)} hop(s)")
    logger.debug("best chained route %s: %d -> %d", best.path, amount_in, best.amount_out)
    return best
