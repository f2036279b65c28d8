"""Snapshot codecs for transformer state.

A snapshot is a JSON-compatible tree: stateless transformers contribute
``None``, stateful ones contribute their dumped state, and composites
contribute the list of their operands' snapshots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from pydantic import PydanticSchemaGenerationError, PydanticUndefinedAnnotation, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .config import DEFAULT_CODEC_CONFIG, CodecConfig
from .errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

S = TypeVar("S")

_TREE: TypeAdapter[Any] = TypeAdapter(Any)


class StateCodec(Protocol[S]):
    """Protocol for converting internal state to and from snapshot values."""

    def dump(self, state: S) -> Any:
        """Convert state into a JSON-compatible value.

        Raises:
            EncodeError: If the state has no faithful JSON form
        """
        ...

    def load(self, raw: Any, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> S:
        """Rebuild state from a JSON-compatible value.

        Raises:
            DecodeError: If the value does not describe a valid state
        """
        ...


@dataclass(frozen=True)
class PydanticStateCodec(StateCodec[S]):
    """State codec backed by a pydantic ``TypeAdapter``.

    Any type pydantic understands works as ``state_type``: ints, tuples,
    optionals, dataclasses and ``BaseModel`` subclasses.
    """

    state_type: Any = Any
    _adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_adapter", TypeAdapter(self.state_type))

    def dump(self, state: S) -> Any:
        """Dump ``state`` and check that loading it back gives an equal state.

        Raises:
            EncodeError: If the state cannot be written as JSON, or would
                come back different (a tuple held under ``Any`` returns
                as a list, for example)
        """
        try:
            raw = self._adapter.dump_python(state, mode="json")
        except PydanticSerializationError as exc:
            raise EncodeError(f"Cannot encode state as {self.describe()}: {exc}", state) from exc
        try:
            restored = self.load(raw)
        except DecodeError as exc:
            raise EncodeError(f"State does not match {self.describe()}: {exc}", state) from exc
        if self._adapter.dump_python(restored) != self._adapter.dump_python(state):
            raise EncodeError(
                f"State {state!r} would restore as {restored!r}; give an explicit state type",
                state,
            )
        return raw

    def load(self, raw: Any, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> S:
        # Round-trip through JSON so strict mode accepts arrays for tuples.
        try:
            return self._adapter.validate_json(_TREE.dump_json(raw), strict=config.strict)
        except ValidationError as exc:
            raise DecodeError(f"Invalid state for {self.describe()}: {exc}", raw) from exc

    def describe(self) -> str:
        return getattr(self.state_type, "__name__", repr(self.state_type))


def dumps(snapshot: Any, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> bytes:
    """Encode a snapshot tree as JSON bytes.

    Raises:
        EncodeError: If the tree holds a value JSON cannot represent
    """
    try:
        data = _TREE.dump_json(snapshot, indent=config.indent)
    except PydanticSerializationError as exc:
        raise EncodeError(f"Cannot encode snapshot: {exc}", snapshot) from exc
    logger.debug("Encoded snapshot (%d bytes)", len(data))
    return data


def infer_state_type(initial: Any) -> Any:
    """Choose the state type to validate against from an initial state.

    Uses ``type(initial)`` so that tuples, sets and models restore as
    themselves. ``None`` and types pydantic cannot describe give ``Any``.
    """
    if initial is None:
        return Any
    state_type = type(initial)
    try:
        TypeAdapter(state_type)
    except (PydanticSchemaGenerationError, PydanticUndefinedAnnotation):
        logger.debug("No schema for %s, restoring state as Any", state_type.__name__)
        return Any
    return state_type


def loads(data: bytes | str) -> Any:
    """Decode JSON bytes into a snapshot tree.

    Raises:
        DecodeError: If the data is not valid JSON
    """
    try:
        snapshot = _TREE.validate_json(data)
    except ValidationError as exc:
        raise DecodeError(f"Invalid snapshot JSON: {exc}", data) from exc
    logger.debug("Decoded snapshot of type %s", type(snapshot).__name__)
    return snapshot


def split_children(raw: Any, count: int) -> list[Any]:
    """Split a composite snapshot into its operands' snapshots.

    Raises:
        DecodeError: If the snapshot is not a list of ``count`` entries
    """
    if not isinstance(raw, list) or len(raw) != count:
        raise DecodeError(f"Expected a list of {count} child snapshots", raw)
    return raw
