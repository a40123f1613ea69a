from __future__ import annotations

"""JSON call / extrinsic / block schemas.

Blocks that arrive as JSON (files, fixtures, tooling) are validated here before
they become runtime values. Shapes are strict: unknown keys are rejected, and
amounts must be non-negative ints that fit the runtime's balance type.

Wire shape:

    {"header": {"block_number": 1},
     "extrinsics": [
        {"caller": "alice",
         "call": {"pallet": "balances", "call": "transfer",
                  "args": {"to": "bob", "amount": 30}}}]}

Pallet semantics are NOT checked here; a well-formed transfer from an empty
account decodes fine and fails later at dispatch.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from palletchain.runtime.calls import (
    BalancesCall,
    ProofOfExistenceCall,
    RUNTIME_CALL_TYPES,
    RuntimeCall,
)
from palletchain.runtime.errors import CallDecodeError
from palletchain.runtime.pallets import balances, proof_of_existence
from palletchain.runtime.support import Block, Extrinsic, Header

Json = Dict[str, Any]


# ---------------------------------------------------------------------------
# Base Models
# ---------------------------------------------------------------------------


class _StrictModel(BaseModel):
    """Strict model: reject unknown keys."""

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Call args
# ---------------------------------------------------------------------------


class TransferArgs(_StrictModel):
    to: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0, strict=True)


class ClaimArgs(_StrictModel):
    content: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class CallEnvelope(_StrictModel):
    pallet: str = Field(..., min_length=1)
    call: str = Field(..., min_length=1)
    args: Dict[str, Any] = Field(default_factory=dict)


class ExtrinsicModel(_StrictModel):
    caller: str = Field(..., min_length=1)
    call: CallEnvelope


class HeaderModel(_StrictModel):
    block_number: int = Field(..., ge=0, strict=True)


class BlockModel(_StrictModel):
    header: HeaderModel
    extrinsics: List[ExtrinsicModel] = Field(default_factory=list)


Builder = Callable[[Any], RuntimeCall]

_CALLS: Dict[Tuple[str, str], Tuple[Type[_StrictModel], Builder]] = {
    (balances.Pallet.name, balances.Transfer.name): (
        TransferArgs,
        lambda a: BalancesCall(balances.Transfer(to=a.to, amount=a.amount)),
    ),
    (proof_of_existence.Pallet.name, proof_of_existence.CreateClaim.name): (
        ClaimArgs,
        lambda a: ProofOfExistenceCall(proof_of_existence.CreateClaim(content=a.content)),
    ),
    (proof_of_existence.Pallet.name, proof_of_existence.RevokeClaim.name): (
        ClaimArgs,
        lambda a: ProofOfExistenceCall(proof_of_existence.RevokeClaim(content=a.content)),
    ),
}

_PALLETS = frozenset(p for p, _ in _CALLS)


def _validate(model: Type[_StrictModel], obj: Any, *, what: str) -> Any:
    try:
        return model.model_validate(obj)
    except ValidationError as ve:
        raise CallDecodeError(
            "schema:validation_error",
            f"{what}_schema_mismatch",
            {"errors": ve.errors(include_url=False, include_context=False)},
        ) from ve


def _build_call(env: CallEnvelope, *, max_amount: Optional[int]) -> RuntimeCall:
    pallet = env.pallet.strip().lower()
    name = env.call.strip().lower()

    if pallet not in _PALLETS:
        raise CallDecodeError("schema:unknown_pallet", "pallet_not_found", {"pallet": env.pallet})

    entry = _CALLS.get((pallet, name))
    if entry is None:
        raise CallDecodeError("schema:unknown_call", "call_not_found", {"pallet": pallet, "call": env.call})

    model, build = entry
    args = _validate(model, env.args, what="args")

    amount = getattr(args, "amount", None)
    if max_amount is not None and amount is not None and int(amount) > int(max_amount):
        raise CallDecodeError(
            "schema:amount_out_of_range",
            "amount_exceeds_balance_type",
            {"amount": int(amount), "max": int(max_amount)},
        )

    return build(args)


def decode_runtime_call(obj: Any, *, max_amount: Optional[int] = None) -> RuntimeCall:
    """Turn a JSON call object into a RuntimeCall variant (already-decoded calls pass through)."""
    if isinstance(obj, RUNTIME_CALL_TYPES):
        return obj  # type: ignore[return-value]
    env = _validate(CallEnvelope, obj, what="call")
    return _build_call(env, max_amount=max_amount)


def encode_runtime_call(call: RuntimeCall) -> Json:
    return {"pallet": call.pallet, "call": call.call.name, "args": call.call.args()}


def decode_extrinsic(obj: Any, *, max_amount: Optional[int] = None) -> Extrinsic[str, RuntimeCall]:
    m = _validate(ExtrinsicModel, obj, what="extrinsic")
    return Extrinsic(caller=m.caller, call=_build_call(m.call, max_amount=max_amount))


def encode_extrinsic(ext: Extrinsic[str, RuntimeCall]) -> Json:
    return {"caller": ext.caller, "call": encode_runtime_call(ext.call)}


def decode_block(obj: Any, *, max_amount: Optional[int] = None) -> Block[int, str, RuntimeCall]:
    m = _validate(BlockModel, obj, what="block")
    exts = []
    for i, em in enumerate(m.extrinsics):
        try:
            exts.append(decode_extrinsic(em, max_amount=max_amount))
        except CallDecodeError as e:
            details = dict(e.details or {})
            details["extrinsic_index"] = i
            raise CallDecodeError(e.code, e.reason, details) from e
    return Block(header=Header(block_number=m.header.block_number), extrinsics=tuple(exts))


def encode_block(block: Block[int, str, RuntimeCall]) -> Json:
    return {
        "header": {"block_number": int(block.header.block_number)},
        "extrinsics": [encode_extrinsic(x) for x in block.extrinsics],
    }


__all__ = [
    "BlockModel",
    "CallEnvelope",
    "ClaimArgs",
    "ExtrinsicModel",
    "HeaderModel",
    "TransferArgs",
    "decode_block",
    "decode_extrinsic",
    "decode_runtime_call",
    "encode_block",
    "encode_extrinsic",
    "encode_runtime_call",
]
