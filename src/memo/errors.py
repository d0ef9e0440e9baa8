"""Error types raised by the memo store and query engine."""

from __future__ import annotations


class MemoError(Exception):
    """Base class for all memo errors."""

    kind = "Unexpected"


class InvalidValueError(MemoError):
    """Malformed input: file names, search patterns, mismatched roots."""

    kind = "InvalidValue"


class MemoIOError(MemoError):
    """Reading, writing or listing the memo directory failed."""

    kind = "IOError"


class UnexpectedError(MemoError):
    """A condition that should not happen under normal operation."""

    kind = "Unexpected"
