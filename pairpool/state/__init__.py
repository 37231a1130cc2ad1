"""
State management for PairPool
"""

from .pool import PoolCheckpoint, PoolReserves, PoolState, PoolStatus, SwapDirection
from .shares import ShareTable

__all__ = [
    "PoolCheckpoint",
    "PoolReserves",
    "PoolState",
    "PoolStatus",
    "SwapDirection",
    "ShareTable",
]
