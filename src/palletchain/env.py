# src/palletchain/env.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_LOADED = False


def load_dotenv_if_present(dotenv_path: Optional[str] = None) -> bool:
    """
    Load a .env file into os.environ once per process.

    Path rules:
        1) If dotenv_path arg provided, use it.
        2) Else if PALLETCHAIN_DOTENV_PATH is set, use that.
        3) Else default to ".env" in current working directory.

    Variables already present in the environment win over the file.

    Returns True if a dotenv file was found AND loaded, else False.
    """
    global _LOADED
    if _LOADED:
        return False

    path_s = dotenv_path or os.getenv("PALLETCHAIN_DOTENV_PATH", ".env")
    path = Path(path_s).expanduser()

    _LOADED = True
    if not path.is_file():
        return False

    load_dotenv(dotenv_path=str(path), override=False)
    return True


def reset_dotenv_state() -> None:
    """Forget that a .env file was loaded (tests only)."""
    global _LOADED
    _LOADED = False
