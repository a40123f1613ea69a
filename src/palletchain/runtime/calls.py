# src/palletchain/runtime/calls.py
from __future__ import annotations

"""Runtime-level call union: one variant per pallet, each wrapping that pallet's own call union."""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Tuple, Type, Union

from palletchain.runtime.pallets import balances, proof_of_existence

Json = Dict[str, Any]


@dataclass(frozen=True)
class BalancesCall:
    pallet: ClassVar[str] = balances.Pallet.name

    call: balances.Call


@dataclass(frozen=True)
class ProofOfExistenceCall:
    pallet: ClassVar[str] = proof_of_existence.Pallet.name

    call: proof_of_existence.Call


RuntimeCall = Union[BalancesCall, ProofOfExistenceCall]

RUNTIME_CALL_TYPES: Tuple[Type[Any], ...] = (BalancesCall, ProofOfExistenceCall)


def is_runtime_call(x: Any) -> bool:
    return isinstance(x, RUNTIME_CALL_TYPES)


def describe_call(call: RuntimeCall) -> str:
    """Short `pallet.call` label for logs and receipts."""
    return f"{call.pallet}.{call.call.name}"


__all__ = [
    "BalancesCall",
    "ProofOfExistenceCall",
    "RUNTIME_CALL_TYPES",
    "RuntimeCall",
    "describe_call",
    "is_runtime_call",
]
