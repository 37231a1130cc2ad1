"""Records emitted by pool operations.

Records are frozen dataclasses. `to_dict()` renders the wire form consumed by
event readers, using the published camelCase field names; `record_to_json()`
encodes that form with the canonical JSON rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Dict, List, Union

from ..state.canonical import canonical_json_bytes


@unique
class Event(Enum):
    MINT = "Mint"
    BURN = "Burn"
    SWAP = "Swap"


@dataclass(frozen=True)
class MintRecord:
    provider: str
    amount_a: int
    amount_b: int
    shares_minted: int

    @property
    def event(self) -> Event:
        return Event.MINT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "amountA": self.amount_a,
            "amountB": self.amount_b,
            "sharesMinted": self.shares_minted,
        }


@dataclass(frozen=True)
class BurnRecord:
    provider: str
    out_a: int
    out_b: int
    shares_burned: int

    @property
    def event(self) -> Event:
        return Event.BURN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "outA": self.out_a,
            "outB": self.out_b,
            "sharesBurned": self.shares_burned,
        }


@dataclass(frozen=True)
class SwapRecord:
    trader: str
    asset_given: str
    amount_given: int
    asset_received: str
    amount_received: int
    reserve_of_given_after: int
    reserve_of_received_after: int
    timestamp: int

    @property
    def event(self) -> Event:
        return Event.SWAP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trader": self.trader,
            "assetGiven": self.asset_given,
            "amountGiven": self.amount_given,
            "assetReceived": self.asset_received,
            "amountReceived": self.amount_received,
            "reserveOfGivenAfter": self.reserve_of_given_after,
            "reserveOfReceivedAfter": self.reserve_of_received_after,
            "timestamp": self.timestamp,
        }


PoolRecord = Union[MintRecord, BurnRecord, SwapRecord]


def record_to_json(record: PoolRecord) -> str:
    """Canonical JSON for one record, tagged with its event name."""
    payload = {"event": record.event.value, "args": record.to_dict()}
    return canonical_json_bytes(payload).decode("utf-8")


class InMemoryEventLog:
    """Ordered, append-only record list."""

    def __init__(self) -> None:
        self._records: List[PoolRecord] = []

    def emit(self, record: PoolRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> List[PoolRecord]:
        return list(self._records)

    def of(self, event: Event) -> List[PoolRecord]:
        return [r for r in self._records if r.event is event]

    def swaps(self) -> List[SwapRecord]:
        return self.of(Event.SWAP)  # type: ignore[return-value]

    def mints(self) -> List[MintRecord]:
        return self.of(Event.MINT)  # type: ignore[return-value]

    def burns(self) -> List[BurnRecord]:
        return self.of(Event.BURN)  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"InMemoryEventLog({len(self._records)} records)"
