# src/palletchain/runtime/pallets/__init__.py
"""Pallets composed by the runtime.

Each module owns one slice of runtime state and, where it has dispatchable
calls, a call union plus a `Pallet.dispatch` that routes them.

NOTE: Keep this package import-safe (no imports of palletchain.runtime.executor).
"""

from __future__ import annotations

__all__ = [
    "system",
    "balances",
    "proof_of_existence",
]
