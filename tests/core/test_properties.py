"""Property tests: random operation sequences against an in-memory pool.

Every accepted or rejected step must leave the pool in a state where shares
are conserved, emptiness is consistent, and each ledger balance at the pool
account equals the matching reserve.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from pairpool import PoolConfig
from pairpool.core.cpmm import quote_swap
from pairpool.errors import PoolError
from pairpool.integration.memory_ledger import TokenLedger, deploy_pool
from pairpool.state.invariants import check_all

USERS = ("alice", "bob", "carol")
FUNDING = 10**15

_amount = st.integers(min_value=0, max_value=10**9)
_user = st.sampled_from(USERS)

_op = st.one_of(
    st.tuples(st.just("add"), _user, _amount, _amount),
    st.tuples(st.just("add_matched"), _user, _amount, st.just(0)),
    st.tuples(st.just("remove"), _user, _amount, st.just(0)),
    st.tuples(st.just("swap1"), _user, _amount, st.just(0)),
    st.tuples(st.just("swap2"), _user, _amount, st.just(0)),
)


def _deploy(rounding: str):
    a = TokenLedger("A")
    b = TokenLedger("B")
    amm = deploy_pool(a, b, config=PoolConfig(decimals=0, swap_rounding=rounding), clock=lambda: 0)
    for user in USERS:
        for token in (a, b):
            token.mint(user, FUNDING)
            token.approve(user, amm.account(), FUNDING)
    return amm, a, b


def _run(amm, op) -> None:
    kind, user, x, y = op
    if kind == "add":
        amm.add_liquidity(x, y, user)
    elif kind == "add_matched":
        amm.add_liquidity(x, amm.calculate_token2_deposit(x), user)
    elif kind == "remove":
        amm.remove_liquidity(min(x, amm.share_of(user)) or x, user)
    elif kind == "swap1":
        amm.swap_token1(x, user)
    else:
        amm.swap_token2(x, user)


@settings(max_examples=150, deadline=None)
@given(ops=st.lists(_op, min_size=1, max_size=30), rounding=st.sampled_from(["floor", "ceil"]))
def test_random_sequences_preserve_pool_invariants(ops, rounding) -> None:
    amm, a, b = _deploy(rounding)
    for op in ops:
        before = (amm.reserves(), amm.shares(), len(amm.events))
        try:
            _run(amm, op)
        except PoolError:
            assert (amm.reserves(), amm.shares(), len(amm.events)) == before

        r = amm.reserves()
        assert check_all(r, amm.shares()) == []
        assert sum(amm.shares().values()) == r.total_shares
        assert (r.total_shares == 0) == (r.reserve_a == 0 and r.reserve_b == 0)
        assert a.balance_of(amm.account()) == r.reserve_a
        assert b.balance_of(amm.account()) == r.reserve_b
        assert not amm.pool.in_progress


_reserve = st.integers(min_value=1, max_value=10**30)


@settings(max_examples=300, deadline=None)
@given(reserve_in=_reserve, reserve_out=_reserve, amount_in=st.integers(min_value=1, max_value=10**30))
def test_ceil_rounding_never_decreases_k(reserve_in, reserve_out, amount_in) -> None:
    try:
        q = quote_swap(reserve_in, reserve_out, amount_in, round_up=True)
    except PoolError:
        return
    assert q.k_after >= q.k_before
    assert 0 <= q.amount_out < reserve_out


@settings(max_examples=300, deadline=None)
@given(reserve_in=_reserve, reserve_out=_reserve, amount_in=st.integers(min_value=1, max_value=10**30))
def test_floor_rounding_loses_less_than_one_output_unit(reserve_in, reserve_out, amount_in) -> None:
    try:
        q = quote_swap(reserve_in, reserve_out, amount_in)
    except PoolError:
        return
    assert 0 <= q.k_before - q.k_after < q.new_reserve_in
    assert 1 <= q.new_reserve_out <= reserve_out


@settings(max_examples=200, deadline=None)
@given(
    seed_a=st.integers(min_value=1, max_value=10**12),
    seed_b=st.integers(min_value=1, max_value=10**12),
    amount=st.integers(min_value=1, max_value=10**12),
)
def test_quote_matches_execution(seed_a, seed_b, amount) -> None:
    amm, _, _ = _deploy("floor")
    amm.add_liquidity(seed_a, seed_b, "alice")
    try:
        estimate = amm.calculate_token1_swap(amount)
    except PoolError:
        return
    assert amm.swap_token1(amount, "bob").amount_received == estimate
