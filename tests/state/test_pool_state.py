"""Tests for pairpool/state/pool.py: guarded mutators, snapshots and rollback."""

import threading

import pytest

from pairpool.errors import PoolInvariantError, ReentrantCall
from pairpool.state.pool import (
    PoolReserves,
    PoolState,
    PoolStatus,
    SwapDirection,
    compute_pool_account,
)


def _seeded() -> PoolState:
    p = PoolState("A", "B")
    p.apply_deposit("lp", 1_000, 2_000, 100)
    return p


class TestConstruction:
    def test_starts_empty(self):
        p = PoolState("A", "B")
        assert p.status is PoolStatus.EMPTY
        assert p.reserves() == PoolReserves(0, 0, 0)
        assert p.shares() == {}
        assert not p.is_seeded

    def test_rejects_identical_assets(self):
        with pytest.raises(ValueError):
            PoolState("A", "A")

    def test_rejects_empty_asset(self):
        with pytest.raises(ValueError):
            PoolState("", "B")

    def test_account_is_deterministic(self):
        assert PoolState("A", "B").account == compute_pool_account("A", "B")
        assert compute_pool_account("A", "B") != compute_pool_account("B", "A")
        assert compute_pool_account("A", "B").startswith("0x")
        assert PoolState("A", "B", account="pool-1").account == "pool-1"


class TestMutators:
    def test_deposit_credits_reserves_and_shares(self):
        p = _seeded()
        assert (p.reserve_a, p.reserve_b, p.total_shares) == (1_000, 2_000, 100)
        assert p.share_of("lp") == 100
        assert p.status is PoolStatus.SEEDED

    def test_withdrawal_debits(self):
        p = _seeded()
        p.apply_withdrawal("lp", 100, 200, 10)
        assert (p.reserve_a, p.reserve_b, p.total_shares) == (900, 1_800, 90)
        assert p.share_of("lp") == 90

    def test_over_burn_is_invariant_error(self):
        p = _seeded()
        with pytest.raises(PoolInvariantError) as exc:
            p.apply_withdrawal("other", 1, 1, 1)
        assert exc.value.violations == ["inv_non_negative"]
        assert p.total_shares == 100

    def test_draining_one_side_is_rejected(self):
        p = _seeded()
        with pytest.raises(PoolInvariantError) as exc:
            p.apply_swap(SwapDirection.B_TO_A, 5, 1_000)
        assert "inv_reserves_positive_when_seeded" in exc.value.violations
        assert p.reserves() == PoolReserves(1_000, 2_000, 100)

    def test_reserves_without_shares_rejected(self):
        p = PoolState("A", "B")
        with pytest.raises(PoolInvariantError) as exc:
            p.apply_deposit("lp", 1, 1, 0)
        assert "inv_empty_iff_unseeded" in exc.value.violations
        assert p.status is PoolStatus.EMPTY

    def test_swap_both_directions(self):
        p = _seeded()
        p.apply_swap(SwapDirection.A_TO_B, 10, 19)
        assert (p.reserve_a, p.reserve_b) == (1_010, 1_981)
        p.apply_swap(SwapDirection.B_TO_A, 19, 10)
        assert (p.reserve_a, p.reserve_b) == (1_000, 2_000)

    def test_negative_amount_rejected(self):
        p = _seeded()
        with pytest.raises(ValueError):
            p.apply_swap(SwapDirection.A_TO_B, -1, 0)


class TestSnapshots:
    def test_checkpoint_restore(self):
        p = _seeded()
        cp = p.checkpoint()
        p.apply_deposit("other", 500, 1_000, 50)
        p.restore(cp)
        assert p.reserves() == PoolReserves(1_000, 2_000, 100)
        assert p.shares() == {"lp": 100}

    def test_shares_returns_copy(self):
        p = _seeded()
        p.shares()["lp"] = 0
        assert p.share_of("lp") == 100

    def test_oriented_and_asset_for(self):
        p = _seeded()
        r = p.reserves()
        assert r.oriented(SwapDirection.A_TO_B) == (1_000, 2_000)
        assert r.oriented(SwapDirection.B_TO_A) == (2_000, 1_000)
        assert p.asset_for(SwapDirection.B_TO_A) == ("B", "A")
        assert r.product == 2_000_000


class TestExclusive:
    def test_nested_entry_is_reentrant_call(self):
        p = PoolState("A", "B")
        with p.exclusive():
            assert p.in_progress
            with pytest.raises(ReentrantCall):
                with p.exclusive():
                    pass
        assert not p.in_progress

    def test_flag_cleared_on_error(self):
        p = PoolState("A", "B")
        with pytest.raises(RuntimeError):
            with p.exclusive():
                raise RuntimeError("boom")
        assert not p.in_progress

    def test_other_thread_waits(self):
        p = PoolState("A", "B")
        entered = threading.Event()
        order = []

        def other():
            with p.exclusive():
                order.append("other")
            entered.set()

        with p.exclusive():
            t = threading.Thread(target=other)
            t.start()
            assert not entered.wait(0.05)
            order.append("main")
        t.join()
        assert order == ["main", "other"]
