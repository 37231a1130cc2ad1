"""Exception types for the pool engine.

Every error is terminal for the call that raised it: the pool is left exactly
as it was before the call. ``code`` is a stable identifier suitable for
surfacing to callers (UI, scripts) that retry with corrected inputs.
"""

from __future__ import annotations


class PoolError(Exception):
    """Base class for all pool rejections."""

    code = "pool_error"


class ZeroAmount(PoolError):
    """An amount argument is zero."""

    code = "zero_amount"


class EmptyPool(PoolError):
    """The operation requires a seeded pool (total_shares > 0)."""

    code = "empty_pool"


class RatioMismatch(PoolError):
    """Deposit amounts do not match the current reserve ratio."""

    code = "ratio_mismatch"

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"amount_b must be {expected} for this amount_a, got {actual}")


class InsufficientShares(PoolError):
    """Withdrawal exceeds the caller's share balance."""

    code = "insufficient_shares"

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(f"cannot burn {requested} shares, balance is {available}")


class InsufficientLiquidity(PoolError):
    """Swap output would consume the entire opposing reserve."""

    code = "insufficient_liquidity"


class TransferFailed(PoolError):
    """The external ledger rejected a pull or push."""

    code = "transfer_failed"


class ReentrantCall(PoolError):
    """A mutating call was made while another mutation on the same pool was in flight."""

    code = "reentrant_call"


class PoolInvariantError(PoolError):
    """Raised when a candidate post-state violates one or more invariants."""

    code = "invariant"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class CompensationFailed(PoolError):
    """A failed operation was rolled back but some ledger transfers could not be reversed.

    ``legs`` lists each unreversed transfer as (kind, asset, counterparty, amount).
    The pool state is back at its pre-call checkpoint; the pool's ledger balance
    differs from the reserves by exactly these legs and needs manual settlement.
    """

    code = "compensation_failed"

    def __init__(self, operation: str, legs: list[tuple[str, str, str, int]]) -> None:
        self.operation = operation
        self.legs = legs
        super().__init__(f"{operation} rolled back with {len(legs)} unreversed ledger transfer(s): {legs}")
