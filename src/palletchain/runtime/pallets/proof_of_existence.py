# src/palletchain/runtime/pallets/proof_of_existence.py
from __future__ import annotations

"""
Proof-of-existence pallet: accounts claim ownership of content keys.

The content type is opaque to this module. It may be the content itself or,
more usefully, a hash of it; the runtime decides. An account may hold many
claims, each claim has exactly one owner.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Generic, Hashable, Optional, TypeVar, Union

from palletchain.runtime.errors import ALREADY_CLAIMED, CLAIM_NOT_FOUND, NOT_OWNER
from palletchain.runtime.support import DispatchResult

AccountId = TypeVar("AccountId", bound=Hashable)
Content = TypeVar("Content", bound=Hashable)

Json = Dict[str, Any]


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CreateClaim(Generic[Content]):
    name: ClassVar[str] = "create_claim"

    content: Content

    def args(self) -> Json:
        return {"content": self.content}


@dataclass(frozen=True)
class RevokeClaim(Generic[Content]):
    name: ClassVar[str] = "revoke_claim"

    content: Content

    def args(self) -> Json:
        return {"content": self.content}


Call = Union[CreateClaim, RevokeClaim]


# ---------------------------------------------------------------------------
# Pallet
# ---------------------------------------------------------------------------


class Pallet(Generic[AccountId, Content]):
    name: ClassVar[str] = "proof_of_existence"

    def __init__(self) -> None:
        self._claims: Dict[Content, AccountId] = {}

    def get_claim(self, content: Content) -> Optional[AccountId]:
        return self._claims.get(content)

    def create_claim(self, caller: AccountId, content: Content) -> DispatchResult:
        if content in self._claims:
            return DispatchResult.failure(ALREADY_CLAIMED)
        self._claims[content] = caller
        return DispatchResult.success()

    def revoke_claim(self, caller: AccountId, content: Content) -> DispatchResult:
        if content not in self._claims:
            return DispatchResult.failure(CLAIM_NOT_FOUND)
        if self._claims[content] != caller:
            return DispatchResult.failure(NOT_OWNER)
        del self._claims[content]
        return DispatchResult.success()

    def dispatch(self, caller: AccountId, call: Call) -> DispatchResult:
        if isinstance(call, CreateClaim):
            return self.create_claim(caller, call.content)
        if isinstance(call, RevokeClaim):
            return self.revoke_claim(caller, call.content)
        raise TypeError(f"unsupported proof_of_existence call: {call!r}")

    def snapshot(self) -> Json:
        return {"claims": {k: self._claims[k] for k in sorted(self._claims)}}


__all__ = ["Call", "CreateClaim", "Pallet", "RevokeClaim"]
