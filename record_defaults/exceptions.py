"""
Custom exception hierarchy for record-defaults.

Why a custom hierarchy:
- Callers can catch specific failures (e.g., OutOfRangeError vs
  CapacityError) without relying on generic ValueError/TypeError.
- Every error raised while walking a record remembers which field (and,
  for nested records, which chain of fields) produced it, so the message
  points straight at the offending default literal.
"""

from __future__ import annotations


class RecordDefaultsError(Exception):
    """Base exception for all record-defaults errors.

    Attributes:
        cause_message: The message describing the underlying failure,
            without any field context.
        field_path: Field names from the outermost record down to the
            field that failed. Empty when a parser is called directly.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.cause_message = message
        self.field_path: list[str] = []

    def add_field(self, name: str) -> RecordDefaultsError:
        """Prefix *name* to the field path as the error unwinds a record."""
        self.field_path.insert(0, name)
        return self

    def __str__(self) -> str:
        if not self.field_path:
            return self.cause_message
        return (
            f"failed to set default for field {'.'.join(self.field_path)}: "
            f"{self.cause_message}"
        )


class InvalidInputError(RecordDefaultsError):
    """Raised when the root argument is not a record instance.

    ``None``, scalars, record *classes* and arbitrary objects are all
    rejected before any traversal happens.
    """


class InvalidTagError(RecordDefaultsError):
    """Raised when a field's default tag is present but is not a string."""


class LiteralSyntaxError(RecordDefaultsError):
    """Raised when a default literal does not match its type family's grammar.

    For example ``"abc"`` for an integer field or ``"TTT"`` for a bool.
    """


class InvalidDurationError(LiteralSyntaxError):
    """Raised for an empty duration literal or one with no digits at all."""


class OutOfRangeError(RecordDefaultsError):
    """Raised when a well-formed literal exceeds the target's range.

    This can happen if:
    - An integer does not fit the signed/unsigned width of the field.
    - A finite float overflows ``float32``/``float64``.
    - A duration exceeds the signed 64-bit nanosecond range.
    """


class CapacityError(RecordDefaultsError):
    """Raised when a decoded array literal has more elements than the
    fixed-length tuple field can hold.
    """


class ParseError(RecordDefaultsError):
    """Raised when a map/slice/array literal fails JSON decoding, or when a
    parsed value cannot be converted to the exact field type.
    """


class UnsupportedTypeError(RecordDefaultsError):
    """Raised when a field's type has no registered parser.

    Covers callables, ``Any``/``object`` and other polymorphic annotations,
    queues and synchronisation primitives, and any type outside the
    supported families.
    """
