from .interval import (
    Interval,
    after,
    before,
    between,
    bind_interval,
    choice,
    choose,
    choose_interval,
    compose_interval,
    compose_intervals,
    during,
    fallback,
    from_interval,
    from_interval_with,
    hold,
    hold_for,
    hold_for_transient,
    hold_transient,
    off,
    off_for,
    on_for,
    to_on,
    unless,
    when,
    window,
)
from .kernel import (
    Auto,
    Blip,
    CodecConfig,
    DecodeError,
    EncodeError,
    StepResult,
    Trace,
    blip,
    count,
    mk_accum,
    mk_const,
    mk_func,
    mk_state,
    step_auto_n,
    stream_auto,
    traced,
)

__all__ = [
    # Kernel
    "Auto",
    "StepResult",
    "Blip",
    "blip",
    "mk_const",
    "mk_func",
    "mk_state",
    "mk_accum",
    "count",
    "stream_auto",
    "step_auto_n",
    "CodecConfig",
    "DecodeError",
    "EncodeError",
    # Tracing
    "Trace",
    "traced",
    # Intervals
    "Interval",
    "off",
    "to_on",
    "on_for",
    "off_for",
    "when",
    "unless",
    "from_interval",
    "from_interval_with",
    "after",
    "before",
    "between",
    "hold",
    "hold_transient",
    "hold_for",
    "hold_for_transient",
    "choice",
    "fallback",
    "choose_interval",
    "choose",
    "during",
    "bind_interval",
    "compose_interval",
    "compose_intervals",
    "window",
]
