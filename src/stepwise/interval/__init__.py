"""Interval transformers - signal transformers that are on or off for contiguous runs of steps.

An interval transformer is an ``Auto[A, Interval[B]]``: at every step it
outputs ``Interval.On(value)`` or ``Interval.Off()``. This package
provides intervals with fixed timing, intervals driven by Blip streams,
and the combinators that choose between, gate, and compose them.
"""

from .laws import (
    check_choose_fold,
    check_choose_interval_fold,
    check_compose_associative,
    check_compose_effect_order,
    check_compose_identity,
    check_round_trip,
    equivalent,
)
from .ops import (
    bind_interval,
    choice,
    choose,
    choose_interval,
    compose_interval,
    compose_intervals,
    during,
    fallback,
    window,
)
from .static import (
    from_interval,
    from_interval_with,
    off,
    off_for,
    on_for,
    to_on,
    unless,
    when,
)
from .triggers import (
    HoldState,
    after,
    before,
    between,
    hold,
    hold_for,
    hold_for_transient,
    hold_transient,
)
from .types import Interval

__all__ = [
    "Interval",
    # Static
    "off",
    "to_on",
    "on_for",
    "off_for",
    "when",
    "unless",
    "from_interval",
    "from_interval_with",
    # Blip-driven
    "after",
    "before",
    "between",
    "hold",
    "hold_transient",
    "hold_for",
    "hold_for_transient",
    "HoldState",
    # Combinators
    "choice",
    "fallback",
    "choose_interval",
    "choose",
    "during",
    "bind_interval",
    "compose_interval",
    "compose_intervals",
    "window",
    # Laws
    "equivalent",
    "check_choose_interval_fold",
    "check_choose_fold",
    "check_compose_associative",
    "check_compose_effect_order",
    "check_compose_identity",
    "check_round_trip",
]
