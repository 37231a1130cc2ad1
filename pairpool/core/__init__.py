"""
Core pool algorithms
"""

from .amm import AMM, AMMSession
from .cpmm import (
    SwapQuote,
    compute_share_mint,
    compute_withdrawal,
    quote_paired_deposit,
    quote_swap,
    spot_price,
)
from .events import BurnRecord, Event, InMemoryEventLog, MintRecord, SwapRecord, record_to_json
from .fixed_point import DECIMALS, SCALE, format_units, to_units
from .interfaces import Clock, EventLog, ExternalLedger
from .liquidity import LiquidityManager
from .swap import SwapEngine
from .transfers import TransferBatch

__all__ = [
    "AMM",
    "AMMSession",
    "SwapQuote",
    "compute_share_mint",
    "compute_withdrawal",
    "quote_paired_deposit",
    "quote_swap",
    "spot_price",
    "BurnRecord",
    "Event",
    "InMemoryEventLog",
    "MintRecord",
    "SwapRecord",
    "record_to_json",
    "DECIMALS",
    "SCALE",
    "format_units",
    "to_units",
    "Clock",
    "EventLog",
    "ExternalLedger",
    "LiquidityManager",
    "SwapEngine",
    "TransferBatch",
]
