"""Small combinators for choosing between a primary computation and a fallback."""

from __future__ import annotations

from typing import Callable, TypeVar

T = TypeVar("T")
V = TypeVar("V")


def fallback_if(
    primary: Callable[[], T],
    predicate: object,
    fallback: Callable[[V], T],
    alternative: V,
) -> T:
    """Return ``primary()``, or ``fallback(alternative)`` if it raises and ``predicate`` is true.

    When ``primary`` raises and ``predicate`` is false, the original exception
    propagates unchanged.
    """
    try:
        return primary()
    except Exception:
        if not predicate:
            raise
    return fallback(alternative)