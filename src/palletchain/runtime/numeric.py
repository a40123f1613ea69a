# src/palletchain/runtime/numeric.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, TypeVar

T = TypeVar("T")


class CheckedArithmetic(Protocol[T]):
    """Capabilities a pallet needs from its numeric value type."""

    def zero(self) -> T:
        ...

    def checked_add(self, a: T, b: T) -> Optional[T]:
        ...

    def checked_sub(self, a: T, b: T) -> Optional[T]:
        ...

    def coerce(self, v: Any) -> T:
        ...


@dataclass(frozen=True, slots=True)
class UnsignedInt:
    """Fixed-width unsigned integer semantics over Python ints.

    checked_add / checked_sub return None instead of wrapping or going
    negative; callers decide what a None means.
    """

    bits: int

    def __post_init__(self) -> None:
        if isinstance(self.bits, bool) or not isinstance(self.bits, int) or self.bits <= 0:
            raise ValueError(f"bits must be a positive int; got: {self.bits!r}")

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def contains(self, v: Any) -> bool:
        # bool is an int subclass; disallow it explicitly
        if isinstance(v, bool) or not isinstance(v, int):
            return False
        return 0 <= v <= self.max_value

    def coerce(self, v: Any) -> int:
        if not self.contains(v):
            raise ValueError(f"value {v!r} is not a u{self.bits}")
        return int(v)

    def checked_add(self, a: int, b: int) -> Optional[int]:
        out = int(a) + int(b)
        if out > self.max_value:
            return None
        return out

    def checked_sub(self, a: int, b: int) -> Optional[int]:
        out = int(a) - int(b)
        if out < 0:
            return None
        return out


U32 = UnsignedInt(32)
U128 = UnsignedInt(128)


__all__ = ["CheckedArithmetic", "U32", "U128", "UnsignedInt"]
