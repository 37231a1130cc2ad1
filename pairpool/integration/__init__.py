"""
Integration adapters for PairPool
"""

from .memory_ledger import BoundLedger, TokenLedger, deploy_pool

__all__ = [
    "BoundLedger",
    "TokenLedger",
    "deploy_pool",
]
