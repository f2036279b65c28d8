from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Interval(Generic[T]):
    """
    The on/off output of an interval transformer for a single step.

    Kinds:
    - on: The interval is active and carries ``value``
    - off: The interval is suppressed; ``value`` is unused

    ``On(None)`` is a valid "on" value and is distinct from ``Off``.
    """

    kind: Literal["on", "off"]
    value: T | None = None

    @staticmethod
    def On(value: T) -> Interval[T]:
        return Interval(kind="on", value=value)

    @staticmethod
    def Off() -> Interval[Any]:
        return Interval(kind="off")

    @property
    def is_on(self) -> bool:
        return self.kind == "on"

    @property
    def is_off(self) -> bool:
        return self.kind == "off"

    def value_or(self, default: T) -> T:
        """The payload if on, else ``default``."""
        if self.is_on:
            return self.value  # type: ignore[return-value]
        return default

    def maybe(self, default: R, func: Callable[[T], R]) -> R:
        """``func(payload)`` if on, else ``default``."""
        if self.is_on:
            return func(self.value)  # type: ignore[arg-type]
        return default

    def map(self, func: Callable[[T], R]) -> Interval[R]:
        if self.is_on:
            return Interval.On(func(self.value))  # type: ignore[arg-type]
        return Interval.Off()

    def flatten(self: Interval[Interval[R]]) -> Interval[R]:
        """Collapse nesting: On(On x) -> On x, On(Off) -> Off, Off -> Off."""
        if self.is_on:
            return self.value  # type: ignore[return-value]
        return Interval.Off()

    def or_else(self, other: Interval[T]) -> Interval[T]:
        """This interval if on, else ``other``."""
        return self if self.is_on else other

    def __repr__(self) -> str:
        if self.is_on:
            return f"On({self.value!r})"
        return "Off"
