"""Runtime configuration."""
from __future__ import annotations
import os

ENV_VAR = "TREADLE_ENV"


def is_production() -> bool:
    """Whether development diagnostics are disabled.

    Set ``TREADLE_ENV=production`` to turn them off.
    """
    return os.environ.get(ENV_VAR, "").strip().lower() == "production"
