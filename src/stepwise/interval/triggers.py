"""Blip-driven intervals.

Each of these consumes a value stream together with one or two Blip
streams and turns on or off as the blips emit. Like the static
intervals, they only suppress values; upstream transformers are still
stepped.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from stepwise.kernel import Auto, Blip, mk_state, mk_state_transient

from .types import Interval

A = TypeVar("A")
T = TypeVar("T")


class HoldState(BaseModel, Generic[T]):
    """Internal state of ``hold`` and ``hold_for``.

    Attributes:
        present: Whether a payload is currently held
        value: The held payload, meaningful only when present
        remaining: Steps left before a held payload expires
    """

    model_config = ConfigDict(frozen=True)

    present: bool = False
    value: T | None = None
    remaining: int = 0

    def to_interval(self) -> Interval[T]:
        if self.present:
            return Interval.On(self.value)  # type: ignore[arg-type]
        return Interval.Off()


def after() -> Auto[tuple[A, Blip[Any]], Interval[A]]:
    """Off until the blip emits, then on forever, starting on that step."""

    def _f(x: tuple[A, Blip[Any]], seen: bool) -> tuple[Interval[A], bool]:
        value, b = x
        if seen or b.fired:
            return Interval.On(value), True
        return Interval.Off(), False

    return mk_state(_f, False, bool)


def before() -> Auto[tuple[A, Blip[Any]], Interval[A]]:
    """On until the blip emits, then off forever, starting on that step."""

    def _f(x: tuple[A, Blip[Any]], done: bool) -> tuple[Interval[A], bool]:
        value, b = x
        if done or b.fired:
            return Interval.Off(), True
        return Interval.On(value), False

    return mk_state(_f, False, bool)


def between() -> Auto[tuple[A, tuple[Blip[Any], Blip[Any]]], Interval[A]]:
    """Starts off; turns on when the start blip emits, off when the end blip emits.

    When both emit on the same step the end blip wins and the step is
    off, whether or not the interval was already on.
    """

    def _f(x: tuple[A, tuple[Blip[Any], Blip[Any]]], active: bool) -> tuple[Interval[A], bool]:
        value, (start, end) = x
        if end.fired:
            return Interval.Off(), False
        if start.fired or active:
            return Interval.On(value), True
        return Interval.Off(), False

    return mk_state(_f, False, bool)


def _hold_step(b: Blip[T], state: HoldState[T]) -> tuple[Interval[T], HoldState[T]]:
    if b.fired:
        state = state.model_copy(update={"present": True, "value": b.payload})
    return state.to_interval(), state


def hold(payload_type: Any = Any) -> Auto[Blip[T], Interval[T]]:
    """Output the last emitted payload; off until the first emission.

    Args:
        payload_type: Type used to validate the held payload on restore.
            Under the default ``Any`` only payloads that JSON keeps as they
            are (numbers, strings, lists, dicts with string keys) can be
            encoded; others raise ``EncodeError``
    """
    return mk_state(_hold_step, HoldState[payload_type](), HoldState[payload_type])


def hold_transient() -> Auto[Blip[T], Interval[T]]:
    """``hold`` with in-memory-only state."""
    return mk_state_transient(_hold_step, HoldState[Any]())


def _hold_for_step(n: int) -> Callable[[Blip[T], HoldState[T]], tuple[Interval[T], HoldState[T]]]:
    held = max(n, 0)

    def _f(b: Blip[T], state: HoldState[T]) -> tuple[Interval[T], HoldState[T]]:
        # The emitting step counts as the first held step.
        if b.fired:
            fresh = state.model_copy(
                update={"present": True, "value": b.payload, "remaining": max(held - 1, 0)}
            )
            return fresh.to_interval(), fresh
        if state.remaining == 0:
            return Interval.Off(), state.model_copy(update={"present": False, "value": None})
        return state.to_interval(), state.model_copy(update={"remaining": state.remaining - 1})

    return _f


def hold_for(n: int, payload_type: Any = Any) -> Auto[Blip[T], Interval[T]]:
    """Like ``hold``, but a payload is only held for ``n`` steps.

    The emitting step is the first of the ``n``; afterwards the interval
    is off until the next emission. Non-positive ``n`` behaves like 1:
    on for the emitting step only.

    Args:
        n: Number of steps to hold each emitted payload for
        payload_type: Type used to validate the held payload on restore; see ``hold``
    """
    return mk_state(_hold_for_step(n), HoldState[payload_type](), HoldState[payload_type])


def hold_for_transient(n: int) -> Auto[Blip[T], Interval[T]]:
    """``hold_for`` with in-memory-only state."""
    return mk_state_transient(_hold_for_step(n), HoldState[Any]())
