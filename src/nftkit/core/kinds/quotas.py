"""
Descriptor for the named 'quota' kind.

Wire spec:
    {"family", "table", "name", "bytes", "used", "over"}

Operations: add, delete. Priority 3. On add, `bytes` and `used` default to 0 and
`over` to False.
"""

from __future__ import annotations

from ..grammar import Kind, Operation
from ..validators import BOOLEAN, NON_NEGATIVE
from .base import FieldSpec, KindDescriptor, ops, require_name

QUOTA_DESC = KindDescriptor(
    kind=Kind.QUOTA,
    priority=3,
    key="quota",
    operations=(Operation.ADD, Operation.DELETE),
    scope=("table",),
    value_field="name",
    value_normalizer=require_name("quota"),
    order=("family", "table", "name", "bytes", "used", "over"),
    fields=(
        FieldSpec("bytes", operations=ops(Operation.ADD), default=0, validator=NON_NEGATIVE),
        FieldSpec("used", operations=ops(Operation.ADD), default=0, validator=NON_NEGATIVE),
        FieldSpec("over", operations=ops(Operation.ADD), default=False, validator=BOOLEAN),
    ),
)
