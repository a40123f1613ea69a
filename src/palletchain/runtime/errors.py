from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DispatchError:
    """Canonical error value returned by pallet calls and runtime dispatch.

    `code` names the error kind, `message` is the exact user-facing text.
    Two errors compare equal on (code, message, details).
    """

    code: str
    message: str
    details: Any | None = None

    def __str__(self) -> str:
        return self.message

    def to_json(self) -> dict:
        out = {"code": self.code, "message": self.message}
        if self.details is not None:
            out["details"] = self.details
        return out


# Balances
INSUFFICIENT_FUNDS = DispatchError("InsufficientFunds", "Not enough funds.")
OVERFLOW = DispatchError("Overflow", "Overflow")

# Proof of existence
ALREADY_CLAIMED = DispatchError("AlreadyClaimed", "this content is already claimed")
NOT_OWNER = DispatchError("NotOwner", "this content is owned by someone else")
CLAIM_NOT_FOUND = DispatchError("ClaimNotFound", "claim does not exist")

# Block execution (structural)
BLOCK_NUMBER_MISMATCH = DispatchError("BlockNumberMismatch", "block number does not match what is expected")


class ExecutorError(RuntimeError):
    pass


class BlockRejected(ExecutorError):
    """Raised by BlockReceipt.raise_for_error() for a structurally invalid block."""

    def __init__(self, error: DispatchError, *, block_number: int) -> None:
        super().__init__(error.message)
        self.error = error
        self.block_number = int(block_number)


@dataclass
class CallDecodeError(ValueError):
    """Raised when a JSON call, extrinsic or block does not match its schema."""

    code: str
    reason: str
    details: Any | None = None

    def __str__(self) -> str:  # pragma: no cover
        if self.details is None:
            return f"{self.code}:{self.reason}"
        return f"{self.code}:{self.reason}:{self.details}"
