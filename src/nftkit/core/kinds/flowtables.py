"""
Descriptor for the 'flowtable' kind.

Wire spec:
    {"family", "table", "name", "hook", "prio", "dev", "flags"?}

Operations: add, delete. Priority 3.

Notes:
- add requires `hook` (only "ingress"), `priority` (emitted as `prio`) and
  `devices` (a non-empty list of interface names, emitted as `dev`).
- `flags` (e.g. ["offload"]) are emitted as strings.
"""

from __future__ import annotations

from ..grammar import Kind, Operation
from ..validators import CHAIN_PRIORITY, DEVICE_LIST, FLOWTABLE_HOOK, STRING_LIST
from .base import FieldSpec, KindDescriptor, ops, require_name

FLOWTABLE_DESC = KindDescriptor(
    kind=Kind.FLOWTABLE,
    priority=3,
    key="flowtable",
    operations=(Operation.ADD, Operation.DELETE),
    scope=("table",),
    value_field="name",
    value_normalizer=require_name("flowtable"),
    order=("family", "table", "name", "hook", "prio", "dev", "flags"),
    fields=(
        FieldSpec(
            "hook",
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            validator=FLOWTABLE_HOOK,
        ),
        FieldSpec(
            "prio",
            keys=("priority", "prio"),
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            validator=CHAIN_PRIORITY,
        ),
        FieldSpec(
            "dev",
            keys=("devices", "dev"),
            operations=ops(Operation.ADD),
            required=ops(Operation.ADD),
            validator=DEVICE_LIST,
        ),
        FieldSpec("flags", operations=ops(Operation.ADD), validator=STRING_LIST),
    ),
)
