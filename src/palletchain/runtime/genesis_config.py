# src/palletchain/runtime/genesis_config.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

import yaml

from palletchain.runtime.structured_logging import log_event

if TYPE_CHECKING:  # pragma: no cover
    from palletchain.runtime.executor import Runtime

Json = Dict[str, Any]

log = logging.getLogger("palletchain.genesis")


@dataclass(frozen=True, slots=True)
class GenesisConfig:
    chain_id: str = ""
    balances: Dict[str, int] = field(default_factory=dict)


def _parse_genesis(obj: Any) -> GenesisConfig:
    if not isinstance(obj, dict):
        raise ValueError("genesis config must be an object")

    chain_id = str(obj.get("chain_id") or "").strip()

    raw = obj.get("balances")
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("genesis balances must be an object of account -> amount")

    balances: Dict[str, int] = {}
    for acct, amount in raw.items():
        a = str(acct).strip()
        if not a:
            raise ValueError("genesis balances contain an empty account id")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise ValueError(f"genesis balance for {a!r} must be a non-negative int; got {amount!r}")
        balances[a] = int(amount)

    return GenesisConfig(chain_id=chain_id, balances=balances)


def load_genesis(path: str) -> GenesisConfig:
    """Load GenesisConfig from a JSON or YAML file.

    Supported input shape (either syntax):
      { "chain_id": "...", "balances": { "alice": 100, "bob": 0 } }

    `.yaml` / `.yml` files are read with yaml.safe_load, anything else as JSON.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(p))

    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        obj = yaml.safe_load(text)
    else:
        obj = json.loads(text)

    return _parse_genesis(obj)


def apply_genesis(runtime: "Runtime", cfg: GenesisConfig) -> bool:
    """Seed balances from genesis. Returns True if anything changed.

    Policy:
      - Only applies at block number 0 (nothing executed yet).
      - Idempotent: balances already at the genesis value are left alone.
      - A non-empty genesis chain_id must match the runtime chain_id.
    """
    if cfg.chain_id and cfg.chain_id != runtime.chain_id:
        raise ValueError(f"genesis is for chain {cfg.chain_id!r}, runtime is {runtime.chain_id!r}")

    if runtime.system.block_number() != 0:
        return False

    changed = False
    for acct in sorted(cfg.balances):
        amount = cfg.balances[acct]
        if runtime.balances.balance(acct) == amount:
            continue
        runtime.balances.set_balance(acct, amount)
        changed = True

    if changed:
        log_event(log, "genesis_applied", chain_id=cfg.chain_id, accounts=len(cfg.balances))
    return changed


__all__ = ["GenesisConfig", "apply_genesis", "load_genesis"]
