# [TESTER] v1

from __future__ import annotations

import pytest

from pairpool.config import PoolConfig, load_config


def test_defaults() -> None:
    cfg = PoolConfig()
    assert cfg.decimals == 18
    assert cfg.scale == 10**18
    assert cfg.initial_shares == 100 * 10**18
    assert cfg.swap_rounding == "floor"
    assert not cfg.rounds_up


@pytest.mark.parametrize(
    "kwargs,exc",
    [
        ({"decimals": -1}, ValueError),
        ({"decimals": 37}, ValueError),
        ({"decimals": True}, TypeError),
        ({"initial_shares_whole": 0}, ValueError),
        ({"initial_shares_whole": "100"}, TypeError),
        ({"swap_rounding": "nearest"}, ValueError),
    ],
)
def test_rejects_bad_values(kwargs, exc) -> None:
    with pytest.raises(exc):
        PoolConfig(**kwargs)


def test_from_mapping_normalizes_rounding_and_rejects_unknown_keys() -> None:
    assert PoolConfig.from_mapping({"swap_rounding": " CEIL "}).rounds_up
    with pytest.raises(ValueError, match="fee_bps"):
        PoolConfig.from_mapping({"fee_bps": 30})
    with pytest.raises(TypeError):
        PoolConfig.from_mapping(["decimals"])  # type: ignore[arg-type]


def test_load_config_nested_and_flat(tmp_path) -> None:
    nested = tmp_path / "nested.yaml"
    nested.write_text("pool:\n  decimals: 6\n  swap_rounding: ceil\n", encoding="utf-8")
    assert load_config(nested) == PoolConfig(decimals=6, swap_rounding="ceil")

    flat = tmp_path / "flat.yaml"
    flat.write_text("initial_shares_whole: 1000\n", encoding="utf-8")
    assert load_config(flat).initial_shares == 1000 * 10**18


def test_load_config_empty_and_invalid(tmp_path) -> None:
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config(empty) == PoolConfig()

    bare = tmp_path / "bare.yaml"
    bare.write_text("pool:\n", encoding="utf-8")
    assert load_config(bare) == PoolConfig()

    bad = tmp_path / "bad.yaml"
    bad.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(bad)


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("PAIRPOOL_DECIMALS", "6")
    monkeypatch.setenv("PAIRPOOL_INITIAL_SHARES", " 10 ")
    monkeypatch.setenv("PAIRPOOL_SWAP_ROUNDING", "Ceil")
    assert PoolConfig.from_env() == PoolConfig(decimals=6, initial_shares_whole=10, swap_rounding="ceil")


def test_from_env_blank_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("PAIRPOOL_DECIMALS", "  ")
    monkeypatch.delenv("PAIRPOOL_INITIAL_SHARES", raising=False)
    monkeypatch.setenv("PAIRPOOL_SWAP_ROUNDING", "")
    assert PoolConfig.from_env() == PoolConfig()


@pytest.mark.parametrize("raw", ["abc", "-1", "99"])
def test_from_env_rejects_bad_decimals(monkeypatch, raw) -> None:
    monkeypatch.setenv("PAIRPOOL_DECIMALS", raw)
    with pytest.raises(ValueError, match="PAIRPOOL_DECIMALS"):
        PoolConfig.from_env()
