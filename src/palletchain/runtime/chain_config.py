# src/palletchain/runtime/chain_config.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

Json = Dict[str, Any]


def _as_int(v: Any, default: int) -> int:
    if v is None:
        return int(default)
    if isinstance(v, bool):
        raise ValueError(f"expected an int, got bool: {v!r}")
    try:
        return int(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"expected an int, got: {v!r}") from e


def _as_str(v: Any, default: str) -> str:
    if v is None:
        return str(default)
    s = str(v)
    return s if s.strip() else str(default)


def _as_bool(v: Any, default: bool) -> bool:
    if v is None:
        return bool(default)
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "no", "n", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class RuntimeConfig:
    chain_id: str

    # Widths of the unsigned integer types used by the pallets.
    balance_bits: int
    block_number_bits: int
    nonce_bits: int

    # Optional genesis file (JSON or YAML). Empty string means none.
    genesis_path: str

    log_level: str
    metrics_enabled: bool


_ALLOWED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def validate_runtime_config(cfg: RuntimeConfig) -> None:
    """Fail-fast validation for operator config."""

    if not isinstance(cfg.chain_id, str) or not cfg.chain_id.strip():
        raise ValueError("chain_id must be a non-empty string")

    for name, bits in (
        ("balance_bits", cfg.balance_bits),
        ("block_number_bits", cfg.block_number_bits),
        ("nonce_bits", cfg.nonce_bits),
    ):
        if isinstance(bits, bool) or not isinstance(bits, int):
            raise ValueError(f"{name} must be an int; got: {bits!r}")
        if bits < 8 or bits > 256 or bits % 8 != 0:
            raise ValueError(f"{name} must be a multiple of 8 in 8..256; got: {bits}")

    lvl = str(cfg.log_level or "").strip().upper()
    if lvl not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log_level must be one of {sorted(_ALLOWED_LOG_LEVELS)}; got: {cfg.log_level!r}")

    if cfg.genesis_path and not Path(cfg.genesis_path).is_file():
        raise ValueError(f"genesis_path does not exist or is not a file: {cfg.genesis_path!r}")


def default_runtime_config() -> RuntimeConfig:
    return RuntimeConfig(
        chain_id="palletchain-dev",
        balance_bits=128,
        block_number_bits=32,
        nonce_bits=32,
        genesis_path="",
        log_level="INFO",
        metrics_enabled=False,
    )


def read_runtime_config_file(path: str) -> RuntimeConfig:
    p = Path(path)
    raw = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("runtime config must be a JSON object")

    d = default_runtime_config()

    genesis_path = _as_str(raw.get("genesis_path"), d.genesis_path)
    if genesis_path and not Path(genesis_path).is_absolute():
        # Relative genesis paths are relative to the config file.
        genesis_path = str(p.parent / genesis_path)

    cfg = RuntimeConfig(
        chain_id=_as_str(raw.get("chain_id"), d.chain_id),
        balance_bits=_as_int(raw.get("balance_bits"), d.balance_bits),
        block_number_bits=_as_int(raw.get("block_number_bits"), d.block_number_bits),
        nonce_bits=_as_int(raw.get("nonce_bits"), d.nonce_bits),
        genesis_path=genesis_path,
        log_level=_as_str(raw.get("log_level"), d.log_level).strip().upper(),
        metrics_enabled=_as_bool(raw.get("metrics_enabled"), d.metrics_enabled),
    )

    validate_runtime_config(cfg)
    return cfg


def load_runtime_config(*, config_path: Optional[str] = None) -> RuntimeConfig:
    p = config_path or os.environ.get("PALLETCHAIN_CONFIG_PATH")
    if p:
        return read_runtime_config_file(p)

    cfg = default_runtime_config()
    validate_runtime_config(cfg)
    return cfg


def apply_runtime_config_to_env(cfg: RuntimeConfig) -> None:
    validate_runtime_config(cfg)
    os.environ["PALLETCHAIN_CHAIN_ID"] = cfg.chain_id
    os.environ["PALLETCHAIN_LOG_LEVEL"] = cfg.log_level.strip().upper()
    os.environ["PALLETCHAIN_METRICS_ENABLED"] = "1" if cfg.metrics_enabled else "0"
