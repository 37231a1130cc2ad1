"""
PairPool: a two-asset constant-product liquidity pool engine.

Integer-only reserves, proportional shares and all-or-nothing operations.
"""

from .config import PoolConfig, load_config
from .core import AMM, AMMSession, LiquidityManager, SwapEngine, format_units, to_units
from .errors import (
    CompensationFailed,
    EmptyPool,
    InsufficientLiquidity,
    InsufficientShares,
    PoolError,
    PoolInvariantError,
    RatioMismatch,
    ReentrantCall,
    TransferFailed,
    ZeroAmount,
)
from .state import PoolState, PoolStatus, SwapDirection

__version__ = "0.1.0"

__all__ = [
    "CompensationFailed",
    "PoolConfig",
    "load_config",
    "AMM",
    "AMMSession",
    "LiquidityManager",
    "SwapEngine",
    "format_units",
    "to_units",
    "EmptyPool",
    "InsufficientLiquidity",
    "InsufficientShares",
    "PoolError",
    "PoolInvariantError",
    "RatioMismatch",
    "ReentrantCall",
    "TransferFailed",
    "ZeroAmount",
    "PoolState",
    "PoolStatus",
    "SwapDirection",
]
