# src/palletchain/runtime/support.py
"""Dispatch framework shared by every pallet and the runtime.

A dispatch-capable unit accepts a caller and a call value and returns a
DispatchResult. The framework only defines the shapes; side effects belong to
whoever implements `dispatch`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, Protocol, Tuple, TypeVar, runtime_checkable

from palletchain.runtime.errors import DispatchError

CallerT = TypeVar("CallerT", contravariant=True)
CallT = TypeVar("CallT", contravariant=True)

C = TypeVar("C")
X = TypeVar("X")
N = TypeVar("N")


@dataclass(frozen=True)
class DispatchResult:
    ok: bool
    error: Optional[DispatchError] = None

    def __iter__(self) -> Iterator[Any]:
        """Allow `ok, err = pallet.transfer(...)` unpacking."""
        yield self.ok
        yield self.error

    @staticmethod
    def success() -> "DispatchResult":
        return _SUCCESS

    @staticmethod
    def failure(error: DispatchError) -> "DispatchResult":
        return DispatchResult(False, error)


_SUCCESS = DispatchResult(True, None)


@runtime_checkable
class Dispatch(Protocol[CallerT, CallT]):
    def dispatch(self, caller: CallerT, call: CallT) -> DispatchResult:
        ...


@dataclass(frozen=True)
class Extrinsic(Generic[C, X]):
    """One caller-attributed call."""

    caller: C
    call: X


@dataclass(frozen=True)
class Header(Generic[N]):
    block_number: N


@dataclass(frozen=True)
class Block(Generic[N, C, X]):
    """Header plus extrinsics in execution order."""

    header: Header[N]
    extrinsics: Tuple[Extrinsic[C, X], ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple.
        if not isinstance(self.extrinsics, tuple):
            object.__setattr__(self, "extrinsics", tuple(self.extrinsics))

    @property
    def block_number(self) -> N:
        return self.header.block_number


__all__ = ["Block", "Dispatch", "DispatchResult", "Extrinsic", "Header"]
