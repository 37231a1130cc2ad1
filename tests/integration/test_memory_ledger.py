"""Tests for pairpool/integration/memory_ledger.py."""

from __future__ import annotations

import pytest

from pairpool.core.interfaces import ExternalLedger
from pairpool.errors import TransferFailed
from pairpool.integration.memory_ledger import BoundLedger, TokenLedger, deploy_pool
from pairpool.state.pool import compute_pool_account


class TestTokenLedger:
    def test_mint_and_supply(self):
        t = TokenLedger("LSE", name="Lasse Token")
        t.mint("a", 10)
        t.mint("b", 5)
        assert t.total_supply() == 15
        assert (t.name, t.symbol) == ("Lasse Token", "LSE")

    def test_transfer_moves_balance(self):
        t = TokenLedger("LSE")
        t.mint("a", 10)
        assert t.transfer("a", "b", 4) is True
        assert (t.balance_of("a"), t.balance_of("b")) == (6, 4)

    def test_transfer_insufficient_balance(self):
        t = TokenLedger("LSE")
        t.mint("a", 1)
        with pytest.raises(TransferFailed):
            t.transfer("a", "b", 2)
        assert t.balance_of("a") == 1

    def test_transfer_from_spends_allowance(self):
        t = TokenLedger("LSE")
        t.mint("owner", 10)
        t.approve("owner", "spender", 7)
        t.transfer_from("spender", "owner", "dest", 5)
        assert t.allowance("owner", "spender") == 2
        assert t.balance_of("dest") == 5
        with pytest.raises(TransferFailed):
            t.transfer_from("spender", "owner", "dest", 3)

    def test_failed_transfer_from_keeps_allowance(self):
        t = TokenLedger("LSE")
        t.mint("owner", 1)
        t.approve("owner", "spender", 7)
        with pytest.raises(TransferFailed):
            t.transfer_from("spender", "owner", "dest", 5)
        assert t.allowance("owner", "spender") == 7

    def test_frozen_account(self):
        t = TokenLedger("LSE")
        t.mint("a", 10)
        t.freeze("b")
        with pytest.raises(TransferFailed, match="frozen"):
            t.transfer("a", "b", 1)
        t.unfreeze("b")
        t.transfer("a", "b", 1)
        assert t.balance_of("b") == 1

    def test_hook_failure_reverts_move(self):
        t = TokenLedger("LSE")
        t.mint("a", 10)
        calls = []

        def hook(sender, to, amount):
            calls.append((sender, to, amount, t.balance_of(to)))
            raise RuntimeError("observer refused")

        t.on_transfer(hook)
        with pytest.raises(RuntimeError):
            t.transfer("a", "b", 3)
        assert calls == [("a", "b", 3, 3)]
        assert (t.balance_of("a"), t.balance_of("b")) == (10, 0)

    def test_rejects_bad_amounts(self):
        t = TokenLedger("LSE")
        with pytest.raises(ValueError):
            t.mint("a", -1)
        with pytest.raises(TypeError):
            t.transfer("a", "b", 1.0)  # type: ignore[arg-type]


class TestBoundLedger:
    def test_satisfies_protocol(self):
        view = TokenLedger("LSE").view("pool")
        assert isinstance(view, BoundLedger)
        assert isinstance(view, ExternalLedger)

    def test_acts_as_bound_account(self):
        t = TokenLedger("LSE")
        t.mint("user", 10)
        t.approve("user", "pool", 10)
        view = t.view("pool")
        view.transfer_from("user", "pool", 6)
        view.transfer("user", 2)
        assert (view.balance_of("pool"), view.balance_of("user")) == (4, 6)


def test_deploy_pool_binds_views_to_pool_account() -> None:
    a = TokenLedger("LSE")
    b = TokenLedger("USD")
    amm = deploy_pool(a, b)
    assert amm.account() == compute_pool_account("LSE", "USD")
    assert amm.liquidity.ledger_a.account == amm.account()
    assert amm.swaps.ledger_b.account == amm.account()

    named = deploy_pool(a, b, account="pool-7")
    assert named.account() == "pool-7"
    assert named.liquidity.ledger_b.token is b


def test_emptied_accounts_leave_the_ledger() -> None:
    t = TokenLedger("LSE")
    t.mint("a", 10)
    t.mint("b", 0)
    t.transfer("a", "b", 10)
    assert t._balances == {"b": 10}
    assert t.total_supply() == 10
