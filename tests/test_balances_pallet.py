from __future__ import annotations

import pytest

from palletchain.runtime.errors import INSUFFICIENT_FUNDS, OVERFLOW
from palletchain.runtime.numeric import UnsignedInt
from palletchain.runtime.pallets import balances
from palletchain.runtime.support import Dispatch, DispatchResult


def _funded(**amounts: int) -> balances.Pallet:
    p = balances.Pallet()
    for who, amount in amounts.items():
        p.set_balance(who, amount)
    return p


def test_unknown_account_has_zero_balance() -> None:
    p = balances.Pallet()
    assert p.balance("nobody") == 0
    assert p.snapshot() == {"balances": {}}


def test_set_balance_overwrites() -> None:
    p = _funded(alice=100)
    p.set_balance("alice", 7)
    assert p.balance("alice") == 7


def test_transfer_moves_funds() -> None:
    p = _funded(alice=100)

    assert p.transfer("alice", "bob", 30) == DispatchResult.success()
    assert p.balance("alice") == 70
    assert p.balance("bob") == 30


def test_transfer_insufficient_funds_leaves_state_untouched() -> None:
    p = _funded(alice=70, bob=30)

    ok, err = p.transfer("alice", "bob", 1000)
    assert ok is False
    assert err == INSUFFICIENT_FUNDS
    assert str(err) == "Not enough funds."
    assert p.balance("alice") == 70
    assert p.balance("bob") == 30


def test_transfer_from_empty_account_does_not_create_entries() -> None:
    p = balances.Pallet()

    res = p.transfer("ghost", "bob", 1)
    assert res.error == INSUFFICIENT_FUNDS
    assert p.snapshot() == {"balances": {}}


def test_transfer_overflow_leaves_state_untouched() -> None:
    u8 = UnsignedInt(8)
    p = balances.Pallet(balance_type=u8)
    p.set_balance("alice", 100)
    p.set_balance("bob", 200)

    res = p.transfer("alice", "bob", 100)
    assert res.ok is False
    assert res.error == OVERFLOW
    assert res.error.message == "Overflow"
    # The debit check passed; it must not have been written.
    assert p.balance("alice") == 100
    assert p.balance("bob") == 200


def test_transfer_at_exact_limits_succeeds() -> None:
    u8 = UnsignedInt(8)
    p = balances.Pallet(balance_type=u8)
    p.set_balance("alice", 55)
    p.set_balance("bob", 200)

    assert p.transfer("alice", "bob", 55).ok is True
    assert p.balance("alice") == 0
    assert p.balance("bob") == 255


@pytest.mark.parametrize("amount", [0, 1, 25, 60])
def test_successful_transfer_conserves_pair_total(amount: int) -> None:
    p = _funded(alice=60, bob=15)
    before = p.balance("alice") + p.balance("bob")

    assert p.transfer("alice", "bob", amount).ok is True
    assert p.balance("alice") + p.balance("bob") == before
    assert p.total_issuance() == before


def test_self_transfer_is_a_no_op() -> None:
    p = _funded(alice=10)

    assert p.transfer("alice", "alice", 4).ok is True
    assert p.balance("alice") == 10

    assert p.transfer("alice", "alice", 11).error == INSUFFICIENT_FUNDS
    assert p.balance("alice") == 10


def test_amounts_outside_the_balance_type_are_rejected() -> None:
    p = balances.Pallet(balance_type=UnsignedInt(8))

    with pytest.raises(ValueError):
        p.set_balance("alice", 256)
    with pytest.raises(ValueError):
        p.set_balance("alice", -1)
    with pytest.raises(ValueError):
        p.transfer("alice", "bob", -5)
    with pytest.raises(ValueError):
        p.set_balance("alice", True)


def test_dispatch_routes_transfer_with_extrinsic_caller() -> None:
    p = _funded(alice=100)
    assert isinstance(p, Dispatch)

    res = p.dispatch("alice", balances.Transfer(to="bob", amount=30))
    assert res.ok is True
    assert p.snapshot() == {"balances": {"alice": 70, "bob": 30}}


def test_dispatch_rejects_foreign_calls() -> None:
    p = balances.Pallet()
    with pytest.raises(TypeError):
        p.dispatch("alice", object())  # type: ignore[arg-type]
