"""Kernel layer - the signal transformer engine."""

from stepwise.kernel.auto import (
    Auto,
    StepResult,
    count,
    identity,
    mk_accum,
    mk_accum_transient,
    mk_composite,
    mk_const,
    mk_func,
    mk_state,
    mk_state_transient,
    traced,
)
from stepwise.kernel.blip import Blip, blip, emit_at, emit_on
from stepwise.kernel.codec import PydanticStateCodec, StateCodec
from stepwise.kernel.config import DEFAULT_CODEC_CONFIG, CodecConfig
from stepwise.kernel.errors import AutoError, DecodeError, EncodeError
from stepwise.kernel.run import iter_auto, step_auto_n, stream_auto
from stepwise.kernel.trace import Evidence, Trace

__all__ = [
    "Auto",
    "StepResult",
    # Constructors
    "mk_const",
    "mk_func",
    "mk_state",
    "mk_state_transient",
    "mk_accum",
    "mk_accum_transient",
    "mk_composite",
    "identity",
    "count",
    "traced",
    # Blips
    "Blip",
    "blip",
    "emit_at",
    "emit_on",
    # Persistence
    "StateCodec",
    "PydanticStateCodec",
    "CodecConfig",
    "DEFAULT_CODEC_CONFIG",
    # Errors
    "AutoError",
    "DecodeError",
    "EncodeError",
    # Drivers
    "stream_auto",
    "step_auto_n",
    "iter_auto",
    # Tracing
    "Evidence",
    "Trace",
]
