"""Static intervals - fixed on/off timing, and conversion back to plain streams.

Intervals that suppress their input do not "switch" anything: whatever
feeds them is still stepped every step, effects included. Only the
gating combinators in ``stepwise.interval.ops`` skip a step.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from stepwise.kernel import Auto, mk_const, mk_func, mk_state

from .types import Interval

A = TypeVar("A")
B = TypeVar("B")


def off() -> Auto[Any, Interval[Any]]:
    """Always off, whatever the input."""
    return mk_const(Interval.Off())


def to_on() -> Auto[A, Interval[A]]:
    """Always on, passing the input through."""
    return mk_func(Interval.On)


def from_interval(default: A) -> Auto[Interval[A], A]:
    """Convert back to a plain stream, outputting ``default`` while off."""
    return mk_func(lambda i: i.value_or(default))


def from_interval_with(default: B, func: Callable[[A], B]) -> Auto[Interval[A], B]:
    """Output ``func(payload)`` while on and ``default`` while off."""
    return mk_func(lambda i: i.maybe(default, func))


def on_for(n: int) -> Auto[A, Interval[A]]:
    """On for the first ``n`` steps, then off forever.

    Non-positive ``n`` is treated as 0: off from the start.
    """

    def _f(x: A, remaining: int) -> tuple[Interval[A], int]:
        if remaining == 0:
            return Interval.Off(), 0
        return Interval.On(x), remaining - 1

    return mk_state(_f, max(n, 0), int)


def off_for(n: int) -> Auto[A, Interval[A]]:
    """Off for the first ``n`` steps, then on forever.

    Non-positive ``n`` is treated as 0: on from the start.
    """

    def _f(x: A, remaining: int) -> tuple[Interval[A], int]:
        if remaining == 0:
            return Interval.On(x), 0
        return Interval.Off(), remaining - 1

    return mk_state(_f, max(n, 0), int)


def when(predicate: Callable[[A], bool]) -> Auto[A, Interval[A]]:
    """On exactly on the steps where ``predicate(input)`` holds."""
    return mk_func(lambda x: Interval.On(x) if predicate(x) else Interval.Off())


def unless(predicate: Callable[[A], bool]) -> Auto[A, Interval[A]]:
    """Off exactly on the steps where ``predicate(input)`` holds."""
    return mk_func(lambda x: Interval.Off() if predicate(x) else Interval.On(x))
