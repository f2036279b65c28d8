"""Error types for the transformer engine."""

from __future__ import annotations


class AutoError(Exception):
    """Base class for errors raised by the transformer engine."""


class DecodeError(AutoError):
    """Error raised when a snapshot cannot be restored into a transformer.

    This error preserves the raw snapshot value for debugging purposes.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"DecodeError({super().__repr__()}, raw_value={self.raw_value!r})"


class EncodeError(AutoError):
    """Error raised when transformer state cannot be written as a snapshot.

    This error preserves the offending state value for debugging purposes.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"EncodeError({super().__repr__()}, raw_value={self.raw_value!r})"
