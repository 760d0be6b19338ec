"""
Descriptor for the 'set' kind.

Wire spec:
    {"family", "table", "name", "type", "flags"?, "timeout"?, "gc-interval"?, "size"?}

Operations: add, delete, flush. Priority 3.

Notes:
- add requires `type`: a single type token ("ipv4_addr") or a concatenation given
  as a list/tuple (("ipv4_addr", "inet_service")), emitted as a list of strings.
- `gc_interval` is accepted for the hyphenated wire field `gc-interval`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ..errors import InvalidFieldError
from ..grammar import Kind, Operation
from ..validators import NON_NEGATIVE, STRING_LIST
from .base import FieldSpec, KindDescriptor, ops, require_name

__all__ = ["SET_DESC", "normalize_set_type"]


def normalize_set_type(value: Any) -> str | list[str]:
    """Return a type token, or a list of tokens for concatenated types."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (list, tuple)) and value:
        items = [v.value if isinstance(v, Enum) else v for v in value]
        if all(isinstance(v, str) and v for v in items):
            return [str(v) for v in items]
    raise InvalidFieldError("type", f"expected a type name or a list of type names, got {value!r}")


SET_DESC = KindDescriptor(
    kind=Kind.SET,
    priority=3,
    key="set",
    operations=(Operation.ADD, Operation.DELETE, Operation.FLUSH),
    scope=("table",),
    value_field="name",
    value_normalizer=require_name("set"),
    order=("family", "table", "name", "type", "flags", "timeout", "gc-interval", "size"),
    fields=(
        FieldSpec(
            "type",
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            normalize=normalize_set_type,
        ),
        FieldSpec("flags", operations=ops(Operation.ADD), validator=STRING_LIST),
        FieldSpec("timeout", operations=ops(Operation.ADD), validator=NON_NEGATIVE),
        FieldSpec(
            "gc-interval",
            keys=("gc_interval", "gc-interval"),
            operations=ops(Operation.ADD),
            validator=NON_NEGATIVE,
        ),
        FieldSpec("size", operations=ops(Operation.ADD), validator=NON_NEGATIVE),
    ),
)
