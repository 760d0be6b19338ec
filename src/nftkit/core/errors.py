"""
Exception types raised while classifying field bags and constructing commands.

Every construction failure derives from BuilderError (a ValueError) and carries
structured attributes so callers can react without parsing messages:

- NoObjectError: the field bag names no recognized object kind.
- AmbiguousObjectError: two or more kinds tie at the top priority.
- MissingContextError: a scope field (family/table/chain/collection) could not be
  resolved from the field bag or the current context.
- MissingFieldError: an operation-specific required field is absent.
- RangeError: a numeric field lies outside its validator bounds.
- InvalidFieldError: wrong value type or unknown field name.
- InvalidEnumError: value outside a fixed enumeration (subclass of InvalidFieldError).
- UnsupportedOperationError: operation not valid for the targeted kind.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Kinds and operations are stored as their lower_snake wire values so that this
      module does not depend on nftkit.core.grammar.
    - Errors are raised before anything is appended to a batch; a failed call never
      leaves a partially built batch behind.

Examples:
    >>> from nftkit.core.errors import MissingFieldError
    >>> err = MissingFieldError("chain", "newname")
    >>> (err.kind, err.field)
    ('chain', 'newname')
    >>> isinstance(err, ValueError)
    True
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

__all__ = [
    "BuilderError",
    "NoObjectError",
    "AmbiguousObjectError",
    "MissingContextError",
    "MissingFieldError",
    "RangeError",
    "InvalidFieldError",
    "InvalidEnumError",
    "UnsupportedOperationError",
]


class BuilderError(ValueError):
    """Base class for every command-construction failure."""


class NoObjectError(BuilderError):
    """The field bag does not name any recognized object kind."""

    def __init__(self, keys: Iterable[str] = (), expected: Iterable[str] = ()) -> None:
        self.keys = tuple(keys)
        self.expected = tuple(expected)
        msg = "no object specified"
        if self.expected:
            msg += f"; expected one of {', '.join(self.expected)}"
        if self.keys:
            msg += f" (got fields: {', '.join(self.keys)})"
        super().__init__(msg)


class AmbiguousObjectError(BuilderError):
    """Two or more object kinds share the highest priority present in the field bag."""

    def __init__(self, candidates: Iterable[str]) -> None:
        self.candidates = tuple(candidates)
        super().__init__(
            f"ambiguous object: {', '.join(self.candidates)} share the same priority; "
            "specify exactly one"
        )


class MissingContextError(BuilderError):
    """A scope field is neither in the field bag nor in the current context."""

    def __init__(self, field: str, hint: str | None = None) -> None:
        self.field = field
        self.hint = hint or f"pass {field}=... or establish it with a previous call or set({field}=...)"
        super().__init__(f"{field} not specified: {self.hint}")


class MissingFieldError(BuilderError):
    """An operation-specific required field is absent."""

    def __init__(self, kind: str, field: str, operation: str | None = None) -> None:
        self.kind = kind
        self.field = field
        self.operation = operation
        where = f"{kind} {operation}" if operation else kind
        super().__init__(f"{where} requires {field}")


class RangeError(BuilderError):
    """A numeric value falls outside the bounds declared by its validator."""

    def __init__(self, field: str, bound: str, value: Any = None) -> None:
        self.field = field
        self.bound = bound
        self.value = value
        super().__init__(f"{field} must be {bound} (got {value!r})")


class InvalidFieldError(BuilderError):
    """A field has the wrong value type or is not recognized."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"invalid field {field}: {reason}")


class InvalidEnumError(InvalidFieldError):
    """A value is not a member of the field's fixed enumeration."""

    def __init__(self, field: str, allowed: Iterable[str], value: Any = None) -> None:
        self.allowed = tuple(allowed)
        self.value = value
        super().__init__(field, f"must be one of {', '.join(self.allowed)} (got {value!r})")


class UnsupportedOperationError(BuilderError):
    """The operation is not permitted for the targeted kind."""

    def __init__(self, operation: str, kind: str, valid_operations: Iterable[str]) -> None:
        self.operation = operation
        self.kind = kind
        self.valid_operations = tuple(valid_operations)
        super().__init__(
            f"unsupported operation {operation} for {kind}; "
            f"valid operations: {', '.join(self.valid_operations)}"
        )
