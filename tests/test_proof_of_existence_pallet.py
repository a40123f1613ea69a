from __future__ import annotations

import pytest

from palletchain.runtime.errors import ALREADY_CLAIMED, CLAIM_NOT_FOUND, NOT_OWNER
from palletchain.runtime.pallets import proof_of_existence as poe


def test_basic_proof_of_existence() -> None:
    p = poe.Pallet()
    assert p.get_claim("Hello, world!") is None

    assert p.create_claim("alice", "Hello, world!").ok is True
    assert p.get_claim("Hello, world!") == "alice"

    res = p.create_claim("bob", "Hello, world!")
    assert res.error == ALREADY_CLAIMED
    assert res.error.message == "this content is already claimed"

    assert p.revoke_claim("alice", "Hello, world!").ok is True
    assert p.create_claim("bob", "Hello, world!").ok is True
    assert p.get_claim("Hello, world!") == "bob"


def test_second_claim_keeps_original_owner() -> None:
    p = poe.Pallet()
    p.create_claim("alice", "hello")

    ok, err = p.create_claim("bob", "hello")
    assert ok is False
    assert err == ALREADY_CLAIMED
    assert p.get_claim("hello") == "alice"

    # Re-claiming one's own content is also rejected.
    assert p.create_claim("alice", "hello").error == ALREADY_CLAIMED


def test_revoke_by_non_owner_fails_and_keeps_entry() -> None:
    p = poe.Pallet()
    p.create_claim("alice", "hello")

    res = p.revoke_claim("bob", "hello")
    assert res.error == NOT_OWNER
    assert str(res.error) == "this content is owned by someone else"
    assert p.get_claim("hello") == "alice"


def test_revoke_by_owner_removes_claim() -> None:
    p = poe.Pallet()
    p.create_claim("alice", "hello")

    assert p.revoke_claim("alice", "hello").ok is True
    assert p.get_claim("hello") is None
    assert p.snapshot() == {"claims": {}}


def test_revoke_missing_claim() -> None:
    p = poe.Pallet()
    res = p.revoke_claim("alice", "never-claimed")
    assert res.error == CLAIM_NOT_FOUND
    assert res.error.message == "claim does not exist"


def test_one_account_can_hold_many_claims() -> None:
    p = poe.Pallet()
    for c in ("b", "a", "c"):
        assert p.create_claim("alice", c).ok is True
    assert p.snapshot() == {"claims": {"a": "alice", "b": "alice", "c": "alice"}}


def test_content_type_is_opaque() -> None:
    p = poe.Pallet()
    digest = bytes.fromhex("deadbeef")
    assert p.create_claim("alice", digest).ok is True
    assert p.get_claim(digest) == "alice"


def test_dispatch_routes_both_calls() -> None:
    p = poe.Pallet()
    assert p.dispatch("alice", poe.CreateClaim(content="x")).ok is True
    assert p.dispatch("bob", poe.RevokeClaim(content="x")).error == NOT_OWNER
    assert p.dispatch("alice", poe.RevokeClaim(content="x")).ok is True
    assert p.get_claim("x") is None

    with pytest.raises(TypeError):
        p.dispatch("alice", "create_claim")  # type: ignore[arg-type]
