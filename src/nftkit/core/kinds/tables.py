"""
Descriptor for the 'table' kind.

Wire spec:
    {"family": ..., "name": ...}

Operations: add, delete, flush. Priority 0 (most contextual).
Adding, deleting or flushing a table makes it the current table of the context.
"""

from __future__ import annotations

from ..grammar import Kind, Operation
from .base import KindDescriptor, require_name

TABLE_DESC = KindDescriptor(
    kind=Kind.TABLE,
    priority=0,
    key="table",
    operations=(Operation.ADD, Operation.DELETE, Operation.FLUSH),
    scope=(),
    value_field="name",
    value_normalizer=require_name("table"),
    order=("family", "name"),
)
