from __future__ import annotations

import json
from pathlib import Path

import pytest

from palletchain.runtime.executor import Runtime
from palletchain.runtime.genesis_config import GenesisConfig, apply_genesis, load_genesis
from palletchain.testing.blocks import make_block


def test_load_json_genesis(tmp_path: Path) -> None:
    p = tmp_path / "genesis.json"
    p.write_text(json.dumps({"chain_id": "unit", "balances": {"alice": 100, "bob": 5}}), encoding="utf-8")

    cfg = load_genesis(str(p))
    assert cfg == GenesisConfig(chain_id="unit", balances={"alice": 100, "bob": 5})


def test_load_yaml_genesis(tmp_path: Path) -> None:
    p = tmp_path / "genesis.yaml"
    p.write_text("chain_id: unit\nbalances:\n  alice: 100\n  charlie: 0\n", encoding="utf-8")

    cfg = load_genesis(str(p))
    assert cfg.chain_id == "unit"
    assert cfg.balances == {"alice": 100, "charlie": 0}


def test_missing_genesis_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_genesis(str(tmp_path / "nope.json"))


@pytest.mark.parametrize(
    "obj",
    [
        [1, 2, 3],
        {"balances": [["alice", 1]]},
        {"balances": {"alice": -1}},
        {"balances": {"alice": "100"}},
        {"balances": {"alice": True}},
        {"balances": {"": 1}},
    ],
)
def test_bad_genesis_is_rejected(tmp_path: Path, obj: object) -> None:
    p = tmp_path / "genesis.json"
    p.write_text(json.dumps(obj), encoding="utf-8")
    with pytest.raises(ValueError):
        load_genesis(str(p))


def test_apply_genesis_seeds_balances_once() -> None:
    rt = Runtime(chain_id="unit")
    cfg = GenesisConfig(chain_id="unit", balances={"alice": 100, "bob": 7})

    assert apply_genesis(rt, cfg) is True
    assert rt.balances.balance("alice") == 100
    assert rt.balances.balance("bob") == 7

    # Idempotent.
    assert apply_genesis(rt, cfg) is False


def test_apply_genesis_only_at_block_zero() -> None:
    rt = Runtime()
    assert rt.execute_block(make_block(1)).ok is True

    assert apply_genesis(rt, GenesisConfig(balances={"alice": 100})) is False
    assert rt.balances.balance("alice") == 0


def test_apply_genesis_respects_balance_width() -> None:
    from palletchain.runtime.numeric import UnsignedInt

    rt = Runtime(balance_type=UnsignedInt(8))
    with pytest.raises(ValueError):
        apply_genesis(rt, GenesisConfig(balances={"alice": 1000}))


def test_apply_genesis_rejects_other_chain() -> None:
    rt = Runtime(chain_id="unit")

    with pytest.raises(ValueError):
        apply_genesis(rt, GenesisConfig(chain_id="other", balances={"alice": 100}))
    assert rt.balances.balance("alice") == 0

    # No chain_id in the file means any chain.
    assert apply_genesis(rt, GenesisConfig(balances={"alice": 100})) is True
