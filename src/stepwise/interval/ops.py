"""Interval combinators: choice, gating, and short-circuit composition."""

# Choice combinators step EVERY operand on every step, in argument order,
# even when only one result is used. If operands record effects (see
# stepwise.kernel.traced), all of those effects happen each step.
#
# Gating combinators (during, bind_interval, and the left operand of
# compose_interval) are the only ones that skip stepping an operand.
# A skipped operand is frozen: its state does not advance.

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce
from typing import Any, TypeVar

from stepwise.kernel import Auto, mk_composite

from .static import off_for, on_for
from .types import Interval

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")

Parts = Sequence[Auto[Any, Any]]


def _choice_step(parts: Parts, x: Any) -> tuple[Interval[Any], tuple[Auto[Any, Any], ...]]:
    left, right = parts
    r1 = left.step(x)
    r2 = right.step(x)
    return r1.output.or_else(r2.output), (r1.next, r2.next)


def _fallback_step(parts: Parts, x: Any) -> tuple[Any, tuple[Auto[Any, Any], ...]]:
    interval, default = parts
    r1 = interval.step(x)
    r2 = default.step(x)
    return r1.output.value_or(r2.output), (r1.next, r2.next)


def choice(first: Auto[A, Interval[B]], *rest: Auto[A, Interval[B]]) -> Auto[A, Interval[B]]:
    """Behave like the first operand that is on; off if none are.

    All operands are stepped every step. With more than two operands the
    choice associates to the right: ``choice(a, b, c) == choice(a, choice(b, c))``.

    Args:
        first: Preferred interval
        *rest: Intervals tried in order when the earlier ones are off

    Returns:
        New interval transformer
    """
    autos = (first, *rest)
    return reduce(
        lambda acc, auto: mk_composite((auto, acc), _choice_step),
        reversed(autos[:-1]),
        autos[-1],
    )


def fallback(interval: Auto[A, Interval[B]], default: Auto[A, B], *more: Auto[Any, Any]) -> Auto[A, B]:
    """Behave like ``interval`` while it is on, otherwise like the default.

    Both operands are stepped every step. Extra arguments chain to the
    right and the last argument is the ultimate default, so
    ``fallback(a, b, c) == fallback(a, fallback(b, c))``: every argument
    but the last must be an interval transformer.

    Args:
        interval: Interval transformer to prefer
        default: Plain transformer (or next interval when ``more`` is given)
        *more: Further intervals, ending in a plain transformer

    Returns:
        New plain transformer
    """
    chain = (interval, default, *more)
    return choose(chain[-1], chain[:-1])


def choose_interval(autos: Sequence[Auto[A, Interval[B]]]) -> Auto[A, Interval[B]]:
    """Step every interval and output the first one that is on, else off.

    Equivalent to folding ``choice`` from the right over ``autos`` with
    ``off()`` as the base case. An empty list is always off.
    """

    def _step(parts: Parts, x: A) -> tuple[Interval[B], list[Auto[Any, Any]]]:
        chosen: Interval[B] = Interval.Off()
        next_parts: list[Auto[Any, Any]] = []
        for part in parts:
            result = part.step(x)
            chosen = chosen.or_else(result.output)
            next_parts.append(result.next)
        return chosen, next_parts

    return mk_composite(autos, _step)


def choose(default: Auto[A, B], autos: Sequence[Auto[A, Interval[B]]]) -> Auto[A, B]:
    """Step every interval and the default; output the first interval that is on.

    Folds ``fallback`` from the right over ``autos`` with ``default`` as
    the base case, so the default is stepped last.
    """
    return reduce(
        lambda acc, auto: mk_composite((auto, acc), _fallback_step),
        reversed(tuple(autos)),
        default,
    )


def _gate(auto: Auto[Any, Any], flatten: bool) -> Auto[Interval[Any], Interval[Any]]:
    def _step(parts: Parts, x: Interval[Any]) -> tuple[Interval[Any], Parts]:
        if x.is_off:
            return Interval.Off(), parts
        (inner,) = parts
        result = inner.step(x.value)
        output = result.output if flatten else Interval.On(result.output)
        return output, (result.next,)

    return mk_composite((auto,), _step)


def during(auto: Auto[A, B]) -> Auto[Interval[A], Interval[B]]:
    """Lift a transformer to run only while its input interval is on.

    On ``On(x)`` the transformer is stepped with ``x`` and its output is
    wrapped in ``On``. On ``Off`` it is not stepped at all: its state is
    frozen and its effects do not happen.
    """
    return _gate(auto, flatten=False)


def bind_interval(auto: Auto[A, Interval[B]]) -> Auto[Interval[A], Interval[B]]:
    """Like ``during`` for an interval transformer, with the nesting flattened."""
    return _gate(auto, flatten=True)


def compose_interval(f: Auto[B, Interval[C]], g: Auto[A, Interval[B]]) -> Auto[A, Interval[C]]:
    """Short-circuit composition: ``f`` after ``g``.

    ``g`` is stepped first. If it is off, ``f`` is skipped for the step and
    the result is off; otherwise ``f`` is stepped with ``g``'s payload.
    Associative, with ``to_on()`` as identity on both sides.
    """
    return g.then(bind_interval(f))


def compose_intervals(*autos: Auto[Any, Interval[Any]]) -> Auto[Any, Interval[Any]]:
    """``compose_interval`` over several stages, right to left.

    ``compose_intervals(f, g, h)`` runs ``h`` first and is
    ``compose_interval(f, compose_interval(g, h))``.
    """
    if not autos:
        raise ValueError("compose_intervals requires at least one interval")
    return reduce(lambda acc, auto: compose_interval(auto, acc), reversed(autos[:-1]), autos[-1])


def window(start: int, finish: int) -> Auto[A, Interval[A]]:
    """Off for the first ``start`` steps, on through step ``finish``, then off.

    Counts are clamped to zero; an empty or inverted window is always off.
    """
    start = max(start, 0)
    return compose_interval(on_for(max(finish, 0) - start), off_for(start))
