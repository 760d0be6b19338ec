"""
Descriptor for the named 'limit' kind.

Wire spec:
    {"family", "table", "name", "rate", "per", "burst"}

Operations: add, delete. Priority 3. On add, `rate` and `per` (second, minute,
hour, day, week) are required (the unit is
accepted as `per` or `unit`) and `burst` defaults to 0.
"""

from __future__ import annotations

from ..grammar import Kind, Operation
from ..validators import NON_NEGATIVE, RATE_UNIT
from .base import FieldSpec, KindDescriptor, ops, require_name

LIMIT_DESC = KindDescriptor(
    kind=Kind.LIMIT,
    priority=3,
    key="limit",
    operations=(Operation.ADD, Operation.DELETE),
    scope=("table",),
    value_field="name",
    value_normalizer=require_name("limit"),
    order=("family", "table", "name", "rate", "per", "burst"),
    fields=(
        FieldSpec(
            "rate",
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            validator=NON_NEGATIVE,
        ),
        FieldSpec(
            "per",
            keys=("per", "unit"),
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            validator=RATE_UNIT,
        ),
        FieldSpec("burst", operations=ops(Operation.ADD), default=0, validator=NON_NEGATIVE),
    ),
)
