"""
Descriptor for the 'map' kind.

Wire spec:
    {"family", "table", "name", "type", "map", "flags"?}

Operations: add, delete, flush. Priority 3.

Notes:
- add requires `type` as a (key_type, value_type) pair; the key type is emitted as
  `type` and the value type as `map`, matching the nftables JSON schema.
"""

from __future__ import annotations

from typing import Any

from ..errors import InvalidFieldError
from ..grammar import Kind, Operation
from ..validators import STRING_LIST
from .base import FieldSpec, KindDescriptor, ops, require_name
from .sets import normalize_set_type

__all__ = ["MAP_DESC"]


def _pair(value: Any) -> tuple[Any, Any]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return value[0], value[1]
    raise InvalidFieldError("type", f"map type must be a (key_type, value_type) pair, got {value!r}")


def _key_type(value: Any) -> str | list[str]:
    return normalize_set_type(_pair(value)[0])


def _value_type(value: Any) -> str:
    result = normalize_set_type(_pair(value)[1])
    if not isinstance(result, str):
        raise InvalidFieldError("type", f"map value type must be a single type, got {value!r}")
    return result


MAP_DESC = KindDescriptor(
    kind=Kind.MAP,
    priority=3,
    key="map",
    operations=(Operation.ADD, Operation.DELETE, Operation.FLUSH),
    scope=("table",),
    value_field="name",
    value_normalizer=require_name("map"),
    order=("family", "table", "name", "type", "map", "flags"),
    fields=(
        FieldSpec(
            "type",
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            normalize=_key_type,
        ),
        FieldSpec(
            "map",
            keys=("type",),
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            normalize=_value_type,
        ),
        FieldSpec("flags", operations=ops(Operation.ADD), validator=STRING_LIST),
    ),
)
