"""Reserved action types.

Every type in the ``@@treadle/`` namespace is private. Reducers must not
handle them and must return their current (or initial) state instead.
"""
from __future__ import annotations
import secrets

_NAMESPACE = "@@treadle"


def _random_suffix() -> str:
    return ".".join(secrets.token_hex(3))


INIT = f"{_NAMESPACE}/INIT{_random_suffix()}"
REPLACE = f"{_NAMESPACE}/REPLACE{_random_suffix()}"


def probe_unknown_action() -> str:
    """Generate a fresh action type no reducer could have special-cased."""
    return f"{_NAMESPACE}/PROBE_UNKNOWN_ACTION{_random_suffix()}"
