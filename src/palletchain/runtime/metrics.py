from __future__ import annotations

import os
import time
from typing import Dict


_counters: Dict[str, int] = {}
_gauges: Dict[str, int] = {}
_started_ms = int(time.time() * 1000)


def metrics_enabled() -> bool:
    v = (os.environ.get("PALLETCHAIN_METRICS_ENABLED") or "").strip().lower()
    if not v:
        return False
    return v in {"1", "true", "yes", "y", "on"}


def inc_counter(name: str, value: int = 1) -> None:
    if not metrics_enabled():
        return
    n = str(name or "").strip()
    if not n:
        return
    _counters[n] = int(_counters.get(n, 0)) + int(value)


def set_gauge(name: str, value: int) -> None:
    if not metrics_enabled():
        return
    n = str(name or "").strip()
    if not n:
        return
    _gauges[n] = int(value)


def reset() -> None:
    _counters.clear()
    _gauges.clear()


def snapshot() -> dict:
    now = int(time.time() * 1000)
    return {
        "ts_ms": now,
        "started_ms": int(_started_ms),
        "uptime_ms": now - int(_started_ms),
        "counters": dict(_counters),
        "gauges": dict(_gauges),
    }


def format_prometheus(prefix: str = "palletchain_") -> str:
    """Prometheus exposition text. Integer counters/gauges only."""
    pre = str(prefix or "").strip() or "palletchain_"
    snap = snapshot()
    lines: list[str] = []

    lines.append(f"{pre}uptime_ms {int(snap['uptime_ms'])}")

    for k in sorted(snap["counters"]):
        lines.append(f"{pre}{k} {int(snap['counters'][k])}")

    for k in sorted(snap["gauges"]):
        lines.append(f"{pre}{k} {int(snap['gauges'][k])}")

    return "\n".join(lines) + "\n"
