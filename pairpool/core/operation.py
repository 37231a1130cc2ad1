"""
Shared plumbing for pool mutators.

Every mutating operation follows checks-effects-interactions:

1. inside `PoolState.exclusive()`, validate preconditions against the
   current state (no writes yet);
2. inside `effects()`, commit the PoolState mutation, run the ledger
   transfers, then emit the record.

If anything in step 2 raises, the completed transfers are compensated, the
PoolState checkpoint is restored and the exception propagates. The
checkpoint is restored even when compensation itself blows up. If some leg
could not be reversed, `CompensationFailed` is raised instead, chained from
the original error and listing the unreversed legs: the pool state is back at
the checkpoint, but its ledger balance differs from the reserves by exactly
those legs.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from ..config import PoolConfig
from ..errors import CompensationFailed
from ..state.pool import PoolState
from .events import InMemoryEventLog
from .interfaces import Clock, EventLog, ExternalLedger
from .transfers import TransferBatch

_log = logging.getLogger(__name__)


def _wall_clock() -> int:
    return int(time.time())


class PoolOperator:
    """Holds the collaborators shared by `LiquidityManager` and `SwapEngine`."""

    def __init__(
        self,
        ledger_a: ExternalLedger,
        ledger_b: ExternalLedger,
        *,
        events: Optional[EventLog] = None,
        config: Optional[PoolConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.ledger_a = ledger_a
        self.ledger_b = ledger_b
        self.events = events if events is not None else InMemoryEventLog()
        self.config = config if config is not None else PoolConfig()
        self.clock = clock if clock is not None else _wall_clock

    @contextmanager
    def effects(self, pool: PoolState, operation: str) -> Iterator[TransferBatch]:
        """Commit phase of `operation`; all-or-nothing across pool and ledgers."""
        checkpoint = pool.checkpoint()
        batch = TransferBatch(pool.account)
        try:
            yield batch
        except Exception as exc:
            try:
                stuck = batch.unwind()
            finally:
                pool.restore(checkpoint)
            _log.warning("%s rolled back: %s", operation, exc)
            if not stuck:
                raise
            legs = [(leg.kind.value, leg.asset, leg.counterparty, leg.amount) for leg in stuck]
            _log.error("%s left %d ledger leg(s) uncompensated: %s", operation, len(stuck), legs)
            raise CompensationFailed(operation, legs) from exc
