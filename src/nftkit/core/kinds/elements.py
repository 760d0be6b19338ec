"""
Descriptor for the 'element' kind.

Wire spec:
    {"family", "table", "name", "elem"}

Operations: add, delete. Priority 4 (highest, so `set=`/`map=` in the same call
become context). `name` is the owning set or map, taken from the bag's `set`/`map`
key or the context collection.

Notes:
- A scalar element is wrapped in a one-item list.
- Tuples (map key/value pairs, concatenations) become lists.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from ..errors import InvalidFieldError
from ..grammar import Kind, Operation
from .base import KindDescriptor

__all__ = ["ELEMENT_DESC", "normalize_elements"]


def _element(item: Any) -> Any:
    if isinstance(item, (list, tuple)):
        return [_element(v) for v in item]
    if isinstance(item, Mapping):
        return copy.deepcopy(dict(item))
    return item


def normalize_elements(value: Any) -> list[Any]:
    items = value if isinstance(value, list) else [value]
    if not items:
        raise InvalidFieldError("element", "must not be empty")
    return [_element(item) for item in items]


ELEMENT_DESC = KindDescriptor(
    kind=Kind.ELEMENT,
    priority=4,
    key="element",
    operations=(Operation.ADD, Operation.DELETE),
    scope=("table", "collection"),
    value_field="elem",
    value_normalizer=normalize_elements,
    order=("family", "table", "name", "elem"),
)
