"""Drivers for stepping transformers over input sequences."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TypeVar

from .auto import Auto

A = TypeVar("A")
B = TypeVar("B")


def stream_auto(auto: Auto[A, B], inputs: Iterable[A]) -> tuple[list[B], Auto[A, B]]:
    """Step ``auto`` once per input.

    Returns:
        The outputs in order and the final transformer
    """
    outputs: list[B] = []
    current = auto
    for x in inputs:
        result = current.step(x)
        outputs.append(result.output)
        current = result.next
    return outputs, current


def step_auto_n(n: int, auto: Auto[A, B], x: A) -> tuple[list[B], Auto[A, B]]:
    """Step ``auto`` ``n`` times with the same input."""
    return stream_auto(auto, (x for _ in range(max(n, 0))))


def iter_auto(auto: Auto[A, B], inputs: Iterable[A]) -> Iterator[B]:
    """Lazily yield one output per input."""
    current = auto
    for x in inputs:
        result = current.step(x)
        current = result.next
        yield result.output
