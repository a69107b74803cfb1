"""Function composition."""
from __future__ import annotations
import functools
from typing import Any, Callable


def _identity(arg: Any) -> Any:
    return arg


def compose(*funcs: Callable[..., Any]) -> Callable[..., Any]:
    """Compose single-argument functions from right to left.

    The rightmost function may take any arguments, since it provides the
    signature of the composed function. Every other function must be unary.

    Example:
        ``compose(f, g, h)(*args)`` is ``f(g(h(*args)))``.

    Args:
        *funcs: Functions to compose.

    Returns:
        The composed function. With no arguments, the identity function;
        with one, that function itself.
    """
    if len(funcs) == 0:
        return _identity

    if len(funcs) == 1:
        return funcs[0]

    def _pair(
        outer: Callable[..., Any],
        inner: Callable[..., Any],
    ) -> Callable[..., Any]:
        def _composed(*args: Any, **kwargs: Any) -> Any:
            return outer(inner(*args, **kwargs))

        return _composed

    return functools.reduce(_pair, funcs)
