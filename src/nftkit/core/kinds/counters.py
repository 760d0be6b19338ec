"""
Descriptor for the named 'counter' kind.

Wire spec:
    {"family", "table", "name", "packets", "bytes"}

Operations: add, delete. Priority 3. On add, packets and bytes default to 0.
"""

from __future__ import annotations

from ..grammar import Kind, Operation
from ..validators import NON_NEGATIVE
from .base import FieldSpec, KindDescriptor, ops, require_name

COUNTER_DESC = KindDescriptor(
    kind=Kind.COUNTER,
    priority=3,
    key="counter",
    operations=(Operation.ADD, Operation.DELETE),
    scope=("table",),
    value_field="name",
    value_normalizer=require_name("counter"),
    order=("family", "table", "name", "packets", "bytes"),
    fields=(
        FieldSpec("packets", operations=ops(Operation.ADD), default=0, validator=NON_NEGATIVE),
        FieldSpec("bytes", operations=ops(Operation.ADD), default=0, validator=NON_NEGATIVE),
    ),
)
