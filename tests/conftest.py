from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Ensure local "src/" takes precedence over any globally-installed "palletchain" package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

src_str = str(SRC)
if src_str not in sys.path:
    sys.path.insert(0, src_str)


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Undo root-logger and metrics changes a test may make."""
    from palletchain.runtime import metrics

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    configured = getattr(root, "_palletchain_configured", False)

    metrics.reset()
    yield
    metrics.reset()

    root.handlers = handlers
    root.setLevel(level)
    setattr(root, "_palletchain_configured", configured)
