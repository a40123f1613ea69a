from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from palletchain.runtime.call_schema import decode_block
from palletchain.runtime.calls import (
    BalancesCall,
    ProofOfExistenceCall,
    RuntimeCall,
    describe_call,
    is_runtime_call,
)
from palletchain.runtime.chain_config import RuntimeConfig, load_runtime_config
from palletchain.runtime.errors import BLOCK_NUMBER_MISMATCH, BlockRejected, DispatchError
from palletchain.runtime.genesis_config import apply_genesis, load_genesis
from palletchain.runtime.metrics import inc_counter, set_gauge
from palletchain.runtime.numeric import U32, U128, UnsignedInt
from palletchain.runtime.pallets import balances, proof_of_existence, system
from palletchain.runtime.structured_logging import log_event
from palletchain.runtime.support import Block, Dispatch, DispatchResult, Extrinsic

Json = Dict[str, Any]

AccountId = str
Content = str

RuntimeExtrinsic = Extrinsic[AccountId, RuntimeCall]
RuntimeBlock = Block[int, AccountId, RuntimeCall]

log = logging.getLogger("palletchain.executor")


@dataclass(frozen=True)
class ExtrinsicFailure:
    """Diagnostic record for one extrinsic whose dispatch failed."""

    block_number: int
    extrinsic_index: int
    caller: AccountId
    call: str
    error: DispatchError

    def to_json(self) -> Json:
        return {
            "block_number": int(self.block_number),
            "extrinsic_index": int(self.extrinsic_index),
            "caller": self.caller,
            "call": self.call,
            "error": self.error.to_json(),
        }


@dataclass(frozen=True)
class BlockReceipt:
    """Outcome of Runtime.execute_block.

    ok=False only for a structural failure (the block was not applied at all).
    Individual extrinsic failures leave ok=True and are listed in `failures`.
    """

    ok: bool
    block_number: int
    error: Optional[DispatchError] = None
    applied_count: int = 0
    failures: Tuple[ExtrinsicFailure, ...] = ()

    @property
    def extrinsic_count(self) -> int:
        return int(self.applied_count) + len(self.failures)

    def raise_for_error(self) -> "BlockReceipt":
        if not self.ok:
            raise BlockRejected(self.error or BLOCK_NUMBER_MISMATCH, block_number=self.block_number)
        return self

    def to_json(self) -> Json:
        out: Json = {
            "ok": bool(self.ok),
            "block_number": int(self.block_number),
            "applied_count": int(self.applied_count),
            "failures": [f.to_json() for f in self.failures],
        }
        if self.error is not None:
            out["error"] = self.error.to_json()
        return out


class Runtime:
    """System, Balances and Proof-of-Existence composed behind one dispatch surface."""

    def __init__(
        self,
        *,
        chain_id: str = "palletchain-dev",
        balance_type: UnsignedInt = U128,
        block_number_type: UnsignedInt = U32,
        nonce_type: UnsignedInt = U32,
    ) -> None:
        self.chain_id = str(chain_id)

        self.system: system.Pallet[AccountId] = system.Pallet(
            block_number_type=block_number_type,
            nonce_type=nonce_type,
        )
        self.balances: balances.Pallet[AccountId] = balances.Pallet(balance_type=balance_type)
        self.proof_of_existence: proof_of_existence.Pallet[AccountId, Content] = proof_of_existence.Pallet()

        # RuntimeCall variant -> owning pallet. Fixed at construction.
        self._routes: Dict[type, Dispatch[AccountId, Any]] = {
            BalancesCall: self.balances,
            ProofOfExistenceCall: self.proof_of_existence,
        }

    @classmethod
    def from_config(cls, cfg: Optional[RuntimeConfig] = None) -> "Runtime":
        cfg = cfg or load_runtime_config()
        rt = cls(
            chain_id=cfg.chain_id,
            balance_type=UnsignedInt(cfg.balance_bits),
            block_number_type=UnsignedInt(cfg.block_number_bits),
            nonce_type=UnsignedInt(cfg.nonce_bits),
        )
        if cfg.metrics_enabled:
            os.environ["PALLETCHAIN_METRICS_ENABLED"] = "1"
        if cfg.genesis_path:
            apply_genesis(rt, load_genesis(cfg.genesis_path))
        return rt

    # ----------------------------
    # Dispatch
    # ----------------------------

    def dispatch(self, caller: AccountId, call: RuntimeCall) -> DispatchResult:
        """Forward `call` to the pallet that owns it; the pallet's result is returned unchanged."""
        pallet = self._routes.get(type(call))
        if pallet is None:
            raise TypeError(f"not a runtime call: {call!r}")
        return pallet.dispatch(caller, call.call)

    # ----------------------------
    # Block execution
    # ----------------------------

    def execute_block(self, block: RuntimeBlock) -> BlockReceipt:
        for i, ext in enumerate(block.extrinsics):
            if not is_runtime_call(ext.call):
                raise TypeError(f"extrinsic {i} does not carry a runtime call: {ext.call!r}")
            if isinstance(ext.call, BalancesCall) and not self.balances.balance_type.contains(ext.call.call.amount):
                raise ValueError(
                    f"extrinsic {i} transfers an amount outside u{self.balances.balance_type.bits}: {ext.call.call.amount!r}"
                )

        declared = block.header.block_number
        expected = self.system.next_block_number()
        if declared != expected:
            inc_counter("blocks_rejected_total")
            log_event(
                log,
                "block_rejected",
                level=logging.WARNING,
                chain_id=self.chain_id,
                declared=declared,
                expected=expected,
                error=BLOCK_NUMBER_MISMATCH.message,
            )
            return BlockReceipt(ok=False, block_number=self.system.block_number(), error=BLOCK_NUMBER_MISMATCH)

        block_number = self.system.inc_block_number()

        applied = 0
        failures = []
        for i, ext in enumerate(block.extrinsics):
            # Nonce is consumed whether or not the call succeeds.
            self.system.inc_nonce(ext.caller)

            res = self.dispatch(ext.caller, ext.call)
            if res.ok:
                applied += 1
                continue

            failure = ExtrinsicFailure(
                block_number=block_number,
                extrinsic_index=i,
                caller=ext.caller,
                call=describe_call(ext.call),
                error=res.error,  # type: ignore[arg-type]
            )
            failures.append(failure)
            log_event(
                log,
                "extrinsic_failed",
                level=logging.WARNING,
                chain_id=self.chain_id,
                block_number=block_number,
                extrinsic_index=i,
                caller=ext.caller,
                call=failure.call,
                error=failure.error.message,
                code=failure.error.code,
            )

        inc_counter("blocks_executed_total")
        inc_counter("extrinsics_applied_total", applied)
        inc_counter("extrinsics_failed_total", len(failures))
        set_gauge("block_number", block_number)
        log_event(
            log,
            "block_executed",
            chain_id=self.chain_id,
            block_number=block_number,
            applied=applied,
            failed=len(failures),
        )

        return BlockReceipt(
            ok=True,
            block_number=block_number,
            applied_count=applied,
            failures=tuple(failures),
        )

    def execute_block_json(self, obj: Any) -> BlockReceipt:
        """Decode a JSON block (see call_schema) and execute it."""
        return self.execute_block(decode_block(obj, max_amount=self.balances.balance_type.max_value))

    # ----------------------------
    # Introspection
    # ----------------------------

    def read_state(self) -> Json:
        return {
            "chain_id": self.chain_id,
            "system": self.system.snapshot(),
            "balances": self.balances.snapshot(),
            "proof_of_existence": self.proof_of_existence.snapshot(),
        }


__all__ = ["BlockReceipt", "ExtrinsicFailure", "Runtime", "RuntimeBlock", "RuntimeExtrinsic"]
