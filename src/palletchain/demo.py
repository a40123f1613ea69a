# src/palletchain/demo.py
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from palletchain.env import load_dotenv_if_present

log = logging.getLogger("palletchain.demo")


def _read_blocks(path: str, *, max_amount: int) -> List:
    from palletchain.runtime.call_schema import decode_block

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("blocks file must be a JSON list of blocks")
    return [decode_block(b, max_amount=max_amount) for b in raw]


def main(argv: Optional[List[str]] = None) -> int:
    # Load .env early so PALLETCHAIN_* vars exist before anything reads them.
    load_dotenv_if_present()

    from palletchain.runtime.chain_config import apply_runtime_config_to_env, load_runtime_config
    from palletchain.runtime.errors import BlockRejected
    from palletchain.runtime.executor import Runtime
    from palletchain.runtime.structured_logging import configure_structured_logging, log_event
    from palletchain.testing.blocks import sample_blocks

    ap = argparse.ArgumentParser(prog="palletchain", description="Run sample blocks and print the final state.")
    ap.add_argument("--config", default=None, help="runtime config JSON (default: $PALLETCHAIN_CONFIG_PATH)")
    ap.add_argument("--blocks", default=None, help="JSON list of blocks to execute instead of the samples")
    args = ap.parse_args(argv)

    cfg = load_runtime_config(config_path=args.config)
    apply_runtime_config_to_env(cfg)
    configure_structured_logging(cfg.log_level)

    runtime = Runtime.from_config(cfg)
    if not cfg.genesis_path:
        runtime.balances.set_balance("alice", 100)

    if args.blocks:
        blocks = _read_blocks(args.blocks, max_amount=runtime.balances.balance_type.max_value)
    else:
        blocks = sample_blocks()

    try:
        for block in blocks:
            runtime.execute_block(block).raise_for_error()
    except BlockRejected as e:
        log_event(log, "demo_aborted", level=logging.ERROR, block_number=e.block_number, error=str(e))
        return 1

    print(json.dumps(runtime.read_state(), indent=2, sort_keys=True))
    return 0
