# src/palletchain/runtime/pallets/balances.py
from __future__ import annotations

"""
Balances pallet: how much each account holds.

Storage is a plain account -> balance map. A missing key is a zero balance,
never an error, so accounts come into existence by receiving funds.

transfer() follows validate-then-commit: both the debit and the credit are
computed with checked arithmetic before either balance is written, so a
failing credit can never leave a half-applied debit behind.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Generic, Hashable, TypeVar, Union

from palletchain.runtime.errors import INSUFFICIENT_FUNDS, OVERFLOW
from palletchain.runtime.numeric import U128, UnsignedInt
from palletchain.runtime.support import DispatchResult

AccountId = TypeVar("AccountId", bound=Hashable)

Json = Dict[str, Any]


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transfer(Generic[AccountId]):
    name: ClassVar[str] = "transfer"

    to: AccountId
    amount: int

    def args(self) -> Json:
        return {"to": self.to, "amount": int(self.amount)}


Call = Union[Transfer]


# ---------------------------------------------------------------------------
# Pallet
# ---------------------------------------------------------------------------


class Pallet(Generic[AccountId]):
    name: ClassVar[str] = "balances"

    def __init__(self, *, balance_type: UnsignedInt = U128) -> None:
        self._balance_type = balance_type
        self._balances: Dict[AccountId, int] = {}

    @property
    def balance_type(self) -> UnsignedInt:
        return self._balance_type

    def set_balance(self, who: AccountId, amount: int) -> None:
        """Overwrite the balance of `who`. Seeding only; not dispatchable."""
        self._balances[who] = self._balance_type.coerce(amount)

    def balance(self, who: AccountId) -> int:
        return self._balances.get(who, self._balance_type.zero())

    def transfer(self, caller: AccountId, to: AccountId, amount: int) -> DispatchResult:
        amt = self._balance_type.coerce(amount)

        caller_balance = self.balance(caller)
        to_balance = self.balance(to)

        new_caller_balance = self._balance_type.checked_sub(caller_balance, amt)
        if new_caller_balance is None:
            return DispatchResult.failure(INSUFFICIENT_FUNDS)

        new_to_balance = self._balance_type.checked_add(to_balance, amt)
        if new_to_balance is None:
            return DispatchResult.failure(OVERFLOW)

        if caller == to:
            # Both checks passed; moving funds to oneself is a no-op.
            return DispatchResult.success()

        self._balances[caller] = new_caller_balance
        self._balances[to] = new_to_balance
        return DispatchResult.success()

    def total_issuance(self) -> int:
        return sum(self._balances.values())

    def dispatch(self, caller: AccountId, call: Call) -> DispatchResult:
        if isinstance(call, Transfer):
            return self.transfer(caller, call.to, call.amount)
        raise TypeError(f"unsupported balances call: {call!r}")

    def snapshot(self) -> Json:
        return {"balances": {k: int(self._balances[k]) for k in sorted(self._balances)}}


__all__ = ["Call", "Pallet", "Transfer"]
