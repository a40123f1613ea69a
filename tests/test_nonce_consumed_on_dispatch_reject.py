from __future__ import annotations

from palletchain.runtime.executor import Runtime
from palletchain.testing.blocks import create_claim, make_block, revoke_claim, transfer


def test_nonce_consumed_when_dispatch_rejects() -> None:
    """Nonce semantics:

    - every extrinsic advances its caller's nonce, even when dispatch fails
    - a rejected structural block consumes nothing
    """
    rt = Runtime()

    # bob has no funds and no claim: both calls fail.
    receipt = rt.execute_block(make_block(1, transfer("bob", "alice", 5), revoke_claim("bob", "doc")))
    assert receipt.ok is True
    assert len(receipt.failures) == 2
    assert rt.system.nonce("bob") == 2

    # Wrong block number: no nonce movement.
    assert rt.execute_block(make_block(7, create_claim("bob", "doc"))).ok is False
    assert rt.system.nonce("bob") == 2

    assert rt.execute_block(make_block(2, create_claim("bob", "doc"))).failures == ()
    assert rt.system.nonce("bob") == 3
    assert rt.system.nonce("alice") == 0
