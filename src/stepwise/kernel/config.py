from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Options for encoding and restoring transformer snapshots.

    Attributes:
        strict: Validate restored state with pydantic strict mode
        indent: JSON indentation of encoded snapshots, compact when None
    """

    strict: bool = False
    indent: int | None = None


DEFAULT_CODEC_CONFIG = CodecConfig()
