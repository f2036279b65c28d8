"""Blip streams - per-step values that either emit a payload or do not."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from .auto import Auto, mk_func, mk_state

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Blip(Generic[T]):
    """
    A discrete event occurrence for a single step.

    Kinds:
    - emit: Something happened at this step, carrying ``payload``
    - no_emit: Nothing happened at this step
    """

    kind: Literal["emit", "no_emit"]
    payload: T | None = None

    @staticmethod
    def Emit(payload: T) -> Blip[T]:
        return Blip(kind="emit", payload=payload)

    @staticmethod
    def NoEmit() -> Blip[Any]:
        return Blip(kind="no_emit")

    @property
    def fired(self) -> bool:
        return self.kind == "emit"

    def __repr__(self) -> str:
        if self.fired:
            return f"Emit({self.payload!r})"
        return "NoEmit"


def blip(default: R, func: Callable[[T], R], b: Blip[T]) -> R:
    """Eliminate a Blip: ``func(payload)`` if it emitted, else ``default``."""
    if b.fired:
        return func(b.payload)  # type: ignore[arg-type]
    return default


def emit_at(n: int) -> Auto[T, Blip[T]]:
    """Emit the input on step ``n`` (1-based) only, never otherwise."""

    def _f(x: T, i: int) -> tuple[Blip[T], int]:
        i += 1
        if i == n:
            return Blip.Emit(x), i
        return Blip.NoEmit(), min(i, n)

    return mk_state(_f, 0, int)


def emit_on(predicate: Callable[[T], bool]) -> Auto[T, Blip[T]]:
    """Emit the input on every step where ``predicate`` holds."""
    return mk_func(lambda x: Blip.Emit(x) if predicate(x) else Blip.NoEmit())
