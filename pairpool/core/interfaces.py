"""
Capabilities the pool engine consumes from its environment.

These are structural protocols: any object with matching methods can be
passed in (the in-memory `TokenLedger` view, a chain client, a test double).
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class ExternalLedger(Protocol):
    """
    Fund movement for one asset, bound to the pool's own account.

    Implementations signal rejection by raising (preferably `TransferFailed`)
    or by returning `False`; any other return value counts as success.
    """

    def transfer_from(self, owner: str, to: str, amount: int) -> Optional[bool]:
        """Pull `amount` from `owner` (who has authorized the pool) to `to`."""
        ...

    def transfer(self, to: str, amount: int) -> Optional[bool]:
        """Push `amount` from the pool's account to `to`."""
        ...

    def balance_of(self, owner: str) -> int:
        ...


@runtime_checkable
class EventLog(Protocol):
    """Sink for structured mint/burn/swap records."""

    def emit(self, record: object) -> None:
        ...


Clock = Callable[[], int]
