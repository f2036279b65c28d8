from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .codec import PydanticStateCodec, dumps, infer_state_type, loads, split_children
from .config import DEFAULT_CODEC_CONFIG, CodecConfig
from .errors import DecodeError
from .trace import Trace

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
S = TypeVar("S")


@dataclass(frozen=True)
class StepResult(Generic[A, B]):
    """
    The outcome of stepping a transformer once.

    Attributes:
        output: Output of this step
        next: The transformer to use for the following step
    """

    output: B
    next: Auto[A, B]


def _save_nothing() -> Any:
    return None


@dataclass(frozen=True)
class Auto(Generic[A, B]):
    """Signal transformer - a discrete-time state machine.

    An ``Auto`` is an immutable value. Stepping it with an input returns
    the output and the next version of the transformer; the original is
    left untouched and can be stepped again from the same state.

    Attributes:
        _step: Function from one input to a StepResult
        _save: Function returning a JSON-compatible snapshot of the state
        _load: Function rebuilding the transformer from a snapshot, or
            None for transformers without state
    """

    _step: Callable[[A], StepResult[A, B]]
    _save: Callable[[], Any] = _save_nothing
    _load: Callable[[Any, CodecConfig], Auto[A, B]] | None = None

    def step(self, x: A) -> StepResult[A, B]:
        """Advance one step with input ``x``."""
        return self._step(x)

    def snapshot(self) -> Any:
        """Return the JSON-compatible snapshot tree of the current state."""
        return self._save()

    def restore(self, raw: Any, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> Auto[A, B]:
        """Rebuild this transformer from a snapshot tree.

        Raises:
            DecodeError: If the snapshot does not fit this transformer
        """
        if self._load is None:
            if raw is not None:
                raise DecodeError("Stateless transformer expects an empty snapshot", raw)
            return self
        return self._load(raw, config)

    def encode(self, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> bytes:
        """Serialize the current state as JSON bytes."""
        return dumps(self.snapshot(), config)

    def decode(self, data: bytes | str, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> Auto[A, B]:
        """Resume a transformer of this shape from ``encode`` output.

        Raises:
            DecodeError: If the data is malformed or does not fit this transformer
        """
        return self.restore(loads(data), config)

    def then(self, other: Auto[B, C]) -> Auto[A, C]:
        """
        Sequential composition: step self, feed its output into ``other``.

        Args:
            other: Transformer consuming this transformer's output

        Returns:
            New transformer stepping both, self first
        """

        def _then(parts: Sequence[Auto[Any, Any]], x: A) -> tuple[C, tuple[Auto[Any, Any], ...]]:
            g, f = parts
            first = g.step(x)
            second = f.step(first.output)
            return second.output, (first.next, second.next)

        return mk_composite((self, other), _then)

    def map(self, func: Callable[[B], C]) -> Auto[A, C]:
        """Apply a pure function to every output."""
        return self.then(mk_func(func))

    def contramap(self, func: Callable[[C], A]) -> Auto[C, B]:
        """Apply a pure function to every input before stepping."""
        return mk_func(func).then(self)

    def fanout(self, other: Auto[A, C]) -> Auto[A, tuple[B, C]]:
        """Step self and ``other`` on the same input and pair their outputs."""

        def _fanout(parts: Sequence[Auto[Any, Any]], x: A) -> tuple[tuple[B, C], tuple[Auto[Any, Any], ...]]:
            left, right = parts
            r1 = left.step(x)
            r2 = right.step(x)
            return (r1.output, r2.output), (r1.next, r2.next)

        return mk_composite((self, other), _fanout)

    def parallel(self, other: Auto[C, D]) -> Auto[tuple[A, C], tuple[B, D]]:
        """Step self on the left of a pair input and ``other`` on the right."""

        def _parallel(parts: Sequence[Auto[Any, Any]], x: tuple[A, C]) -> tuple[tuple[B, D], tuple[Auto[Any, Any], ...]]:
            left, right = parts
            r1 = left.step(x[0])
            r2 = right.step(x[1])
            return (r1.output, r2.output), (r1.next, r2.next)

        return mk_composite((self, other), _parallel)

    def first(self) -> Auto[tuple[A, C], tuple[B, C]]:
        """Act on the left of a pair input, passing the right through."""
        return self.parallel(identity())

    def second(self) -> Auto[tuple[C, A], tuple[C, B]]:
        """Act on the right of a pair input, passing the left through."""
        return identity().parallel(self)


def mk_func(func: Callable[[A], B]) -> Auto[A, B]:
    """Stateless transformer outputting ``func(input)`` every step."""
    auto: Auto[A, B]

    def _step(x: A) -> StepResult[A, B]:
        return StepResult(func(x), auto)

    auto = Auto(_step)
    return auto


def mk_const(value: B) -> Auto[Any, B]:
    """Transformer ignoring its input and always outputting ``value``."""
    return mk_func(lambda _: value)


def identity() -> Auto[A, A]:
    """Transformer passing its input through unchanged."""
    return mk_func(lambda x: x)


def mk_state(
    func: Callable[[A, S], tuple[B, S]],
    initial: S,
    state_type: Any = Any,
) -> Auto[A, B]:
    """Stateful transformer whose state survives encode/decode.

    Each step computes ``func(input, state) -> (output, new_state)``.

    Args:
        func: Step function
        initial: Initial state
        state_type: Type used to validate restored state with pydantic;
            when omitted it is taken from the type of ``initial``

    Returns:
        New persisting transformer
    """
    if state_type is Any:
        state_type = infer_state_type(initial)
    codec = PydanticStateCodec(state_type)

    def build(state: S) -> Auto[A, B]:
        def _step(x: A) -> StepResult[A, B]:
            output, new_state = func(x, state)
            return StepResult(output, build(new_state))

        def _load(raw: Any, config: CodecConfig) -> Auto[A, B]:
            return build(codec.load(raw, config))

        return Auto(_step, lambda: codec.dump(state), _load)

    return build(initial)


def mk_state_transient(func: Callable[[A, S], tuple[B, S]], initial: S) -> Auto[A, B]:
    """Stateful transformer whose state is kept in memory only.

    Steps exactly like ``mk_state``; encoding contributes an empty
    snapshot and restoring keeps the current state.
    """

    def build(state: S) -> Auto[A, B]:
        auto: Auto[A, B]

        def _step(x: A) -> StepResult[A, B]:
            output, new_state = func(x, state)
            return StepResult(output, build(new_state))

        def _load(raw: Any, config: CodecConfig) -> Auto[A, B]:
            if raw is not None:
                logger.warning("Transient transformer ignoring snapshot %r", raw)
            return auto

        auto = Auto(_step, _save_nothing, _load)
        return auto

    return build(initial)


def _accumulate(func: Callable[[A, S], S]) -> Callable[[A, S], tuple[S, S]]:
    def _f(x: A, state: S) -> tuple[S, S]:
        new_state = func(x, state)
        return new_state, new_state

    return _f


def mk_accum(func: Callable[[A, S], S], initial: S, state_type: Any = Any) -> Auto[A, S]:
    """Persisting accumulator: the new state is also the output."""
    return mk_state(_accumulate(func), initial, state_type)


def mk_accum_transient(func: Callable[[A, S], S], initial: S) -> Auto[A, S]:
    """Non-persisting accumulator: the new state is also the output."""
    return mk_state_transient(_accumulate(func), initial)


def mk_composite(
    parts: Sequence[Auto[Any, Any]],
    step: Callable[[Sequence[Auto[Any, Any]], A], tuple[B, Sequence[Auto[Any, Any]]]],
) -> Auto[A, B]:
    """Transformer orchestrating operand transformers without state of its own.

    ``step`` receives the current operands and the input, steps whichever
    operands it needs, and returns the output with the next operands.
    Operands it does not step must be returned unchanged. The snapshot
    is the list of the operands' snapshots.

    Args:
        parts: Operand transformers
        step: Orchestration function

    Returns:
        New composite transformer
    """
    children = tuple(parts)

    def _step(x: A) -> StepResult[A, B]:
        output, next_children = step(children, x)
        return StepResult(output, mk_composite(next_children, step))

    def _save() -> Any:
        return [child.snapshot() for child in children]

    def _load(raw: Any, config: CodecConfig) -> Auto[A, B]:
        snapshots = split_children(raw, len(children))
        return mk_composite(
            [child.restore(snap, config) for child, snap in zip(children, snapshots)],
            step,
        )

    return Auto(_step, _save, _load)


def count() -> Auto[Any, int]:
    """Persisting step counter outputting 1, 2, 3, ..."""
    return mk_accum(lambda _, n: n + 1, 0, int)


def traced(auto: Auto[A, B], trace: Trace, label: str) -> Auto[A, B]:
    """Record every step of ``auto`` in ``trace`` under ``label``.

    Steps that are skipped by a gating combinator leave no record.
    """

    def _traced(parts: Sequence[Auto[Any, Any]], x: A) -> tuple[B, tuple[Auto[Any, Any], ...]]:
        (inner,) = parts
        result = inner.step(x)
        trace.record(label, info={"input": x, "output": result.output})
        return result.output, (result.next,)

    return mk_composite((auto,), _traced)
