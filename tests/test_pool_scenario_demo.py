from __future__ import annotations

import json


def test_scenario_replays_lifecycle() -> None:
    from pairpool import PoolConfig
    from tools.pool_scenario_demo import run_scenario

    result = run_scenario(PoolConfig())

    assert result["ledger_in_sync"] is True
    assert result["shares"] == {"deployer": "100.0", "liquidity_provider": "20.0"}
    assert [s["step"] for s in result["steps"]][0] == "deployer seeds 100000/100000"
    assert result["steps"][0]["price_a_in_b"] == "1.0"
    assert [e["event"] for e in result["events"]] == ["Mint", "Mint"] + ["Swap"] * 5 + ["Burn"]


def test_main_json_output(capsys) -> None:
    from tools.pool_scenario_demo import main

    assert main(["--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["steps"][-1]["total_shares"] == "120.0"


def test_main_reads_yaml_config(tmp_path, capsys) -> None:
    from tools.pool_scenario_demo import main

    cfg = tmp_path / "pool.yaml"
    cfg.write_text("pool:\n  decimals: 6\n  initial_shares_whole: 100\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 0
    out = capsys.readouterr().out
    assert "[pool-demo] ledger in sync: True" in out
