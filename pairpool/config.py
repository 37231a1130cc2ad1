"""
Pool configuration.

`PoolConfig` is a frozen dataclass; build it directly, from a mapping, from a
YAML file (`load_config`) or from `PAIRPOOL_*` environment variables
(`PoolConfig.from_env`).

Example YAML:

    pool:
      decimals: 18
      initial_shares_whole: 100
      swap_rounding: floor
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

SWAP_ROUNDING_FLOOR = "floor"
SWAP_ROUNDING_CEIL = "ceil"
SWAP_ROUNDING_MODES = (SWAP_ROUNDING_FLOOR, SWAP_ROUNDING_CEIL)

MAX_DECIMALS = 36


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if v < lo or v > hi:
        raise ValueError(f"{name} must be in [{lo}, {hi}], got {v}")
    return v


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


@dataclass(frozen=True)
class PoolConfig:
    # Fixed-point scale: one whole token is 10**decimals units.
    decimals: int = 18
    # Shares minted to the first depositor, in whole shares.
    initial_shares_whole: int = 100
    # "floor": after_out = floor(k / after_in) (quote formula as published).
    # "ceil": after_out = ceil(k / after_in), k never decreases across a swap.
    swap_rounding: str = SWAP_ROUNDING_FLOOR

    def __post_init__(self) -> None:
        for name in ("decimals", "initial_shares_whole"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if not (0 <= self.decimals <= MAX_DECIMALS):
            raise ValueError(f"decimals must be in [0, {MAX_DECIMALS}]: {self.decimals}")
        if self.initial_shares_whole <= 0:
            raise ValueError(f"initial_shares_whole must be positive: {self.initial_shares_whole}")
        if self.swap_rounding not in SWAP_ROUNDING_MODES:
            raise ValueError(f"swap_rounding must be one of {SWAP_ROUNDING_MODES}: {self.swap_rounding!r}")

    @property
    def scale(self) -> int:
        return 10**self.decimals

    @property
    def initial_shares(self) -> int:
        """INITIAL_SHARES in fixed-point units."""
        return self.initial_shares_whole * self.scale

    @property
    def rounds_up(self) -> bool:
        return self.swap_rounding == SWAP_ROUNDING_CEIL

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "PoolConfig":
        if not isinstance(obj, Mapping):
            raise TypeError("pool config must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(obj) - known)
        if unknown:
            raise ValueError(f"unknown pool config keys: {unknown}")
        kwargs = dict(obj)
        if isinstance(kwargs.get("swap_rounding"), str):
            kwargs["swap_rounding"] = kwargs["swap_rounding"].strip().lower()
        return cls(**kwargs)

    @classmethod
    def from_env(cls, prefix: str = "PAIRPOOL_") -> "PoolConfig":
        defaults = cls()
        return cls(
            decimals=_env_int(f"{prefix}DECIMALS", defaults.decimals, lo=0, hi=MAX_DECIMALS),
            initial_shares_whole=_env_int(
                f"{prefix}INITIAL_SHARES", defaults.initial_shares_whole, lo=1, hi=10**30
            ),
            swap_rounding=_env_str(f"{prefix}SWAP_ROUNDING", defaults.swap_rounding).lower(),
        )


def load_config(path: Union[str, Path]) -> PoolConfig:
    """Load a `PoolConfig` from a YAML file (optionally nested under `pool:`)."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return PoolConfig()
    if not isinstance(obj, Mapping):
        raise TypeError("config YAML must be a mapping")
    if "pool" in obj:
        obj = obj["pool"]
        if obj is None:
            return PoolConfig()
    return PoolConfig.from_mapping(obj)
