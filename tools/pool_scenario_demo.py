#!/usr/bin/env python3
"""
Offline pool scenario: seed, deposit, swap both ways, withdraw.

Runs against two in-memory tokens and prints the pool after every step.

    python tools/pool_scenario_demo.py
    python tools/pool_scenario_demo.py --json --config pool.yaml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pairpool.config import PoolConfig, load_config
from pairpool.core.amm import AMM
from pairpool.core.events import record_to_json
from pairpool.core.fixed_point import format_units, to_units
from pairpool.errors import PoolError
from pairpool.integration.memory_ledger import TokenLedger, deploy_pool

_log = logging.getLogger("pool_scenario_demo")

DEPLOYER = "deployer"
PROVIDER = "liquidity_provider"
INVESTOR1 = "investor1"
INVESTOR2 = "investor2"


def _snapshot(amm: AMM, label: str, decimals: int) -> Dict[str, Any]:
    r = amm.reserves()
    return {
        "step": label,
        "reserve_a": format_units(r.reserve_a, decimals),
        "reserve_b": format_units(r.reserve_b, decimals),
        "total_shares": format_units(r.total_shares, decimals),
        "price_a_in_b": format_units(amm.spot_price(), decimals) if r.total_shares else None,
    }


def run_scenario(config: PoolConfig) -> Dict[str, Any]:
    d = config.decimals

    def units(n: int) -> int:
        return to_units(n, d)

    lse = TokenLedger("LSE", name="Lasse Token", symbol="LSE")
    usd = TokenLedger("USD", name="USD Token", symbol="USD")
    lse.mint(DEPLOYER, units(100_000))
    usd.mint(DEPLOYER, units(100_000))
    lse.mint(PROVIDER, units(100_000))
    usd.mint(PROVIDER, units(100_000))
    lse.mint(INVESTOR1, units(50_000))
    usd.mint(INVESTOR2, units(50_000))

    amm = deploy_pool(lse, usd, config=config)
    pool = amm.account()
    for owner in (DEPLOYER, PROVIDER, INVESTOR1, INVESTOR2):
        lse.approve(owner, pool, units(100_000))
        usd.approve(owner, pool, units(100_000))

    steps: List[Dict[str, Any]] = []

    amm.connect(DEPLOYER).add_liquidity(units(100_000), units(100_000))
    steps.append(_snapshot(amm, "deployer seeds 100000/100000", d))

    token2_deposit = amm.calculate_token2_deposit(units(50_000))
    amm.connect(PROVIDER).add_liquidity(units(50_000), token2_deposit)
    steps.append(_snapshot(amm, "provider deposits 50000 + matched USD", d))

    for amount in (1, 666, 2500):
        estimate = amm.calculate_token1_swap(units(amount))
        rec = amm.connect(INVESTOR1).swap_token1(units(amount))
        if rec.amount_received != estimate:
            raise AssertionError(f"estimate {estimate} != delivered {rec.amount_received}")
        steps.append(_snapshot(amm, f"investor1 swaps {amount} LSE", d))

    for amount in (1000, 5000):
        estimate = amm.calculate_token2_swap(units(amount))
        rec = amm.connect(INVESTOR2).swap_token2(units(amount))
        if rec.amount_received != estimate:
            raise AssertionError(f"estimate {estimate} != delivered {rec.amount_received}")
        steps.append(_snapshot(amm, f"investor2 swaps {amount} USD", d))

    amm.connect(PROVIDER).remove_liquidity(units(30))
    steps.append(_snapshot(amm, "provider burns 30 shares", d))

    return {
        "steps": steps,
        "shares": {owner: format_units(v, d) for owner, v in sorted(amm.shares().items())},
        "ledger_in_sync": lse.balance_of(pool) == amm.reserve_a() and usd.balance_of(pool) == amm.reserve_b(),
        "events": [json.loads(record_to_json(r)) for r in amm.events.records],
    }


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    ap.add_argument("--config", type=Path, default=None, help="YAML PoolConfig file")
    ap.add_argument("--json", action="store_true", help="print the full result as JSON")
    ap.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = load_config(args.config) if args.config is not None else PoolConfig.from_env()

    try:
        result = run_scenario(config)
    except PoolError as exc:
        _log.error("scenario failed (%s): %s", exc.code, exc)
        print(f"[pool-demo] FAIL: {exc}")
        return 1

    if args.json:
        print(json.dumps(result, indent=2, sort_keys=True))
        return 0

    for step in result["steps"]:
        print(
            f"[pool-demo] {step['step']}: reserves=({step['reserve_a']}, {step['reserve_b']}) "
            f"shares={step['total_shares']} price={step['price_a_in_b']}"
        )
    print(f"[pool-demo] shares: {result['shares']}")
    print(f"[pool-demo] ledger in sync: {result['ledger_in_sync']}")
    print(f"[pool-demo] events emitted: {len(result['events'])}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
