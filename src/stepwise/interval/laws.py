"""Interval algebra laws and executable equivalence checks."""

# Interval combinators satisfy the following algebraic laws:
#
# 1. Choice fold: choose_interval(xs) == foldr(choice, off(), xs)
#    Choosing from a list is right-nested binary choice ending in off
#
# 2. Fallback fold: choose(d, xs) == foldr(fallback, d, xs)
#    The default is consulted only when every interval is off
#
# 3. Associativity: compose_interval(compose_interval(f, g), h)
#        == compose_interval(f, compose_interval(g, h))
#    Short-circuit chains can be regrouped freely, and both groupings
#    step the same operands in the same order with the same inputs
#
# 4. Identity: compose_interval(to_on(), f) == f == compose_interval(f, to_on())
#
# 5. Round trip: to_on().then(from_interval(d)) == identity()
#    The default is never used for an always-on stream
#
# Two transformers are equal here when stepping both over the same
# inputs yields the same outputs. Both sides of a law step their own
# copies, so a transformer value can appear on both sides.

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import reduce
from typing import Any, TypeVar

from stepwise.kernel import Auto, Trace, identity, stream_auto, traced

from .ops import choice, choose, choose_interval, compose_interval, fallback
from .static import from_interval, off, to_on
from .types import Interval

A = TypeVar("A")
B = TypeVar("B")


def equivalent(left: Auto[A, B], right: Auto[A, B], inputs: Iterable[A]) -> bool:
    """Check that two transformers produce the same outputs for ``inputs``."""
    xs = list(inputs)
    left_out, _ = stream_auto(left, xs)
    right_out, _ = stream_auto(right, xs)
    return left_out == right_out


def check_choose_interval_fold(autos: Sequence[Auto[A, Interval[B]]], inputs: Iterable[A]) -> bool:
    folded = reduce(lambda acc, auto: choice(auto, acc), reversed(tuple(autos)), off())
    return equivalent(choose_interval(autos), folded, inputs)


def check_choose_fold(default: Auto[A, B], autos: Sequence[Auto[A, Interval[B]]], inputs: Iterable[A]) -> bool:
    folded = reduce(lambda acc, auto: fallback(auto, acc), reversed(tuple(autos)), default)
    return equivalent(choose(default, autos), folded, inputs)


def check_compose_associative(
    f: Auto[Any, Interval[Any]],
    g: Auto[Any, Interval[Any]],
    h: Auto[A, Interval[Any]],
    inputs: Iterable[A],
) -> bool:
    left = compose_interval(compose_interval(f, g), h)
    right = compose_interval(f, compose_interval(g, h))
    return equivalent(left, right, inputs)


def check_compose_identity(f: Auto[A, Interval[B]], inputs: Iterable[A]) -> bool:
    xs = list(inputs)
    return equivalent(compose_interval(to_on(), f), f, xs) and equivalent(compose_interval(f, to_on()), f, xs)


def check_round_trip(default: A, inputs: Iterable[A]) -> bool:
    return equivalent(to_on().then(from_interval(default)), identity(), inputs)


def _step_records(trace: Trace) -> list[tuple[str, Any, Any]]:
    return [(ev.action, ev.info["input"], ev.info["output"]) for ev in trace.get_events()]


def check_compose_effect_order(
    f: Auto[Any, Interval[Any]],
    g: Auto[Any, Interval[Any]],
    h: Auto[A, Interval[Any]],
    inputs: Iterable[A],
) -> bool:
    """Check that both groupings of ``f``, ``g`` and ``h`` step them identically.

    Each side gets its own traced copies of the operands; the traces must
    agree on which operand was stepped, in what order, with what input.
    """
    xs = list(inputs)
    left_trace, right_trace = Trace(), Trace()
    lf, lg, lh = (traced(a, left_trace, label) for a, label in ((f, "f"), (g, "g"), (h, "h")))
    rf, rg, rh = (traced(a, right_trace, label) for a, label in ((f, "f"), (g, "g"), (h, "h")))
    stream_auto(compose_interval(compose_interval(lf, lg), lh), xs)
    stream_auto(compose_interval(rf, compose_interval(rg, rh)), xs)
    return _step_records(left_trace) == _step_records(right_trace)
