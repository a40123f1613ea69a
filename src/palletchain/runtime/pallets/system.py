# src/palletchain/runtime/pallets/system.py
from __future__ import annotations

"""
System pallet: block number and per-account nonces.

Nothing here is dispatchable. The block executor drives it directly:
  - inc_block_number() once per accepted block
  - inc_nonce(caller) once per extrinsic, whatever the dispatch outcome

Counters are fixed-width unsigned ints; running past the width is not a
recoverable dispatch error and raises OverflowError.
"""

from typing import Any, Dict, Generic, Hashable, TypeVar

from palletchain.runtime.numeric import U32, UnsignedInt

AccountId = TypeVar("AccountId", bound=Hashable)

Json = Dict[str, Any]


class Pallet(Generic[AccountId]):
    def __init__(self, *, block_number_type: UnsignedInt = U32, nonce_type: UnsignedInt = U32) -> None:
        self._block_number_type = block_number_type
        self._nonce_type = nonce_type
        self._block_number: int = block_number_type.zero()
        self._nonces: Dict[AccountId, int] = {}

    def block_number(self) -> int:
        return self._block_number

    def next_block_number(self) -> int:
        nxt = self._block_number_type.checked_add(self._block_number, self._block_number_type.one())
        if nxt is None:
            raise OverflowError("block number overflow")
        return nxt

    def inc_block_number(self) -> int:
        self._block_number = self.next_block_number()
        return self._block_number

    def nonce(self, who: AccountId) -> int:
        return self._nonces.get(who, self._nonce_type.zero())

    def inc_nonce(self, who: AccountId) -> int:
        nxt = self._nonce_type.checked_add(self.nonce(who), self._nonce_type.one())
        if nxt is None:
            raise OverflowError(f"nonce overflow for account {who!r}")
        self._nonces[who] = nxt
        return nxt

    def snapshot(self) -> Json:
        return {
            "block_number": int(self._block_number),
            "nonces": {k: int(self._nonces[k]) for k in sorted(self._nonces)},
        }


__all__ = ["Pallet"]
