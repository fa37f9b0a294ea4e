"""Bracketing root finders for monotonic scalar functions."""

from __future__ import annotations

from typing import Callable


def bisect_decreasing(
    func: Callable[[float], float],
    target: float,
    low: float,
    high: float,
    iterations: int = 50,
) -> float:
    """Return ``x`` in ``[low, high]`` with ``func(x) ≈ target``.

    ``func`` must be monotonically decreasing over the bracket. A fixed number
    of halvings is performed and the midpoint of the final bracket is
    returned; when ``target`` lies outside ``func``'s range over the bracket
    the result converges to the nearer end.
    """

    if iterations <= 0:
        raise ValueError("Bisection needs at least one iteration.")
    if low >= high:
        raise ValueError(f"Invalid bracket [{low}, {high}].")

    for _ in range(iterations):
        mid = (low + high) / 2.0
        if func(mid) < target:
            high = mid  # overshoot
        else:
            low = mid
    return (low + high) / 2.0


def bisect_increasing(
    func: Callable[[float], float],
    target: float,
    low: float,
    high: float,
    iterations: int = 50,
) -> float:
    """Counterpart of :func:`bisect_decreasing` for increasing ``func``."""

    return bisect_decreasing(lambda x: -func(x), -target, low, high, iterations)
