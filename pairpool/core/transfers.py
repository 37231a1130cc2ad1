"""
External fund movement with compensation (imperative shell).

A `TransferBatch` runs the ledger calls of one pool operation in order and
remembers every completed leg. If a later leg, or anything after the batch,
fails, `unwind()` reverses the completed legs newest-first so the external
ledgers end up where they started:

- a completed pull (owner -> pool) is reversed with a push back to the owner,
- a completed push (pool -> owner) is reversed with a pull from the owner,
  which needs the owner's authorization on that ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..errors import PoolError, TransferFailed
from .interfaces import ExternalLedger

_log = logging.getLogger(__name__)


class LegKind(Enum):
    PULL = "pull"
    PUSH = "push"


@dataclass(frozen=True)
class TransferLeg:
    kind: LegKind
    asset: str
    counterparty: str
    amount: int
    ledger: ExternalLedger


def _invoke(description: str, fn: Callable[[], Optional[bool]]) -> None:
    try:
        ok = fn()
    except PoolError:
        raise
    except Exception as exc:
        raise TransferFailed(f"{description} failed: {exc}") from exc
    if ok is False:
        raise TransferFailed(f"{description} was rejected by the ledger")


class TransferBatch:
    """Ordered ledger calls for one operation on the pool `account`."""

    def __init__(self, account: str) -> None:
        self._account = account
        self._done: List[TransferLeg] = []

    @property
    def completed(self) -> List[TransferLeg]:
        return list(self._done)

    def pull(self, ledger: ExternalLedger, asset: str, owner: str, amount: int) -> None:
        """Move `amount` of `asset` from `owner` into the pool."""
        if amount == 0:
            return
        _invoke(
            f"pull of {amount} {asset} from {owner}",
            lambda: ledger.transfer_from(owner, self._account, amount),
        )
        self._done.append(TransferLeg(LegKind.PULL, asset, owner, amount, ledger))

    def push(self, ledger: ExternalLedger, asset: str, to: str, amount: int) -> None:
        """Move `amount` of `asset` from the pool to `to`."""
        if amount == 0:
            return
        _invoke(
            f"push of {amount} {asset} to {to}",
            lambda: ledger.transfer(to, amount),
        )
        self._done.append(TransferLeg(LegKind.PUSH, asset, to, amount, ledger))

    def unwind(self) -> List[TransferLeg]:
        """
        Reverse completed legs newest-first.

        Returns the legs that could not be reversed (empty on full success).
        Every leg is attempted even if an earlier reversal fails, whatever
        `PoolError` the ledger raised for it.
        """
        stuck: List[TransferLeg] = []
        for leg in reversed(self._done):
            if leg.kind is LegKind.PULL:
                description = f"refund of {leg.amount} {leg.asset} to {leg.counterparty}"
                fn = lambda leg=leg: leg.ledger.transfer(leg.counterparty, leg.amount)
            else:
                description = f"reclaim of {leg.amount} {leg.asset} from {leg.counterparty}"
                fn = lambda leg=leg: leg.ledger.transfer_from(leg.counterparty, self._account, leg.amount)
            try:
                _invoke(description, fn)
            except PoolError as exc:
                _log.error("compensation failed: %s", exc)
                stuck.append(leg)
        self._done.clear()
        return stuck
