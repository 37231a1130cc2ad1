"""
Constant Product Market Maker (CPMM) math for a two-asset pool.

Pure, integer-only functions shared by the quote and execution paths, so a
quote computed against a pre-state is exactly what execution against the same
pre-state delivers.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per operation
- Space Complexity: O(1) auxiliary
- Zero protocol fee: the full input is priced.

Rounding favours the pool on every payout: minted shares and withdrawn
amounts are floored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..errors import EmptyPool, InsufficientLiquidity, InsufficientShares, ZeroAmount
from ..state.types import require_non_negative
from .fixed_point import mul_div_ceil, mul_div_floor


@dataclass(frozen=True)
class SwapQuote:
    amount_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def quote_paired_deposit(reserve_in: int, reserve_out: int, amount_in: int) -> int:
    """
    Amount of the other asset that must accompany `amount_in`:

        floor(reserve_out * amount_in / reserve_in)
    """
    require_non_negative("reserve_in", reserve_in)
    require_non_negative("reserve_out", reserve_out)
    require_non_negative("amount_in", amount_in)
    if reserve_in == 0:
        raise EmptyPool("cannot price a deposit against an empty reserve")
    return mul_div_floor(reserve_out, amount_in, reserve_in)


def compute_share_mint(reserve_a: int, total_shares: int, amount_a: int) -> int:
    """
    Shares minted for a ratio-matched deposit into a seeded pool:

        floor(total_shares * amount_a / reserve_a)
    """
    require_non_negative("reserve_a", reserve_a)
    require_non_negative("total_shares", total_shares)
    require_non_negative("amount_a", amount_a)
    if reserve_a == 0 or total_shares == 0:
        raise EmptyPool("share mint requires a seeded pool")
    return mul_div_floor(total_shares, amount_a, reserve_a)


def compute_withdrawal(
    share_amount: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> Tuple[int, int]:
    """
    Asset amounts returned for burning `share_amount`:

        out_a = floor(reserve_a * share_amount / total_shares)
        out_b = floor(reserve_b * share_amount / total_shares)

    Burning every share returns the full reserves, leaving the pool empty.
    """
    require_non_negative("share_amount", share_amount)
    require_non_negative("reserve_a", reserve_a)
    require_non_negative("reserve_b", reserve_b)
    require_non_negative("total_shares", total_shares)
    if total_shares == 0:
        raise EmptyPool("cannot withdraw from an empty pool")
    if share_amount == 0:
        raise ZeroAmount("share_amount must be positive")
    if share_amount > total_shares:
        raise InsufficientShares(share_amount, total_shares)
    return (
        mul_div_floor(reserve_a, share_amount, total_shares),
        mul_div_floor(reserve_b, share_amount, total_shares),
    )


def quote_swap(reserve_in: int, reserve_out: int, amount_in: int, *, round_up: bool = False) -> SwapQuote:
    """
    Exact-in swap quote and post-state.

        after_in  = reserve_in + amount_in
        after_out = floor(reserve_in * reserve_out / after_in)   (round_up=False)
                    ceil(reserve_in * reserve_out / after_in)    (round_up=True)
        amount_out = reserve_out - after_out

    With round_up=True the post-swap product never drops below k. With the
    default floor the product may drop by less than `after_in`.

    Raises:
        EmptyPool: either reserve is zero
        ZeroAmount: amount_in is zero
        InsufficientLiquidity: the output would drain the whole reserve
    """
    require_non_negative("reserve_in", reserve_in)
    require_non_negative("reserve_out", reserve_out)
    require_non_negative("amount_in", amount_in)
    if reserve_in == 0 or reserve_out == 0:
        raise EmptyPool("cannot swap against an empty pool")
    if amount_in == 0:
        raise ZeroAmount("amount_in must be positive")

    after_in = reserve_in + amount_in
    if round_up:
        after_out = mul_div_ceil(reserve_in, reserve_out, after_in)
    else:
        after_out = mul_div_floor(reserve_in, reserve_out, after_in)
    amount_out = reserve_out - after_out

    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"swap of {amount_in} would drain the output reserve ({reserve_out})"
        )

    return SwapQuote(
        amount_in=amount_in,
        amount_out=amount_out,
        new_reserve_in=after_in,
        new_reserve_out=after_out,
        k_before=reserve_in * reserve_out,
        k_after=after_in * after_out,
    )


def spot_price(reserve_base: int, reserve_quote: int, scale: int) -> int:
    """Marginal price of the base asset in quote units, scaled: floor(reserve_quote * scale / reserve_base)."""
    require_non_negative("reserve_base", reserve_base)
    require_non_negative("reserve_quote", reserve_quote)
    if reserve_base == 0 or reserve_quote == 0:
        raise EmptyPool("pool has no price while empty")
    return mul_div_floor(reserve_quote, scale, reserve_base)
