"""
Descriptor for the 'chain' kind.

Wire spec:
    {"family", "table", "name", "newname"?, "type"?, "hook"?, "prio"?, "policy"?, "dev"?}

Operations: add, delete, flush, rename. Priority 1.

Notes:
- rename requires `newname`.
- A chain added with any of type/hook/priority is a base chain: missing `type`
  defaults to "filter" and missing priority to 0. Regular chains get no defaults.
- `priority` is accepted as the bag key (with `prio` as an alias) and emitted as
  `prio`; `device` is accepted for `dev` (netdev ingress chains).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..constants import DEFAULT_CHAIN_PRIORITY, DEFAULT_CHAIN_TYPE
from ..grammar import Kind, Operation
from ..validators import CHAIN_HOOK, CHAIN_POLICY, CHAIN_PRIORITY, CHAIN_TYPE, NAME
from .base import FieldSpec, KindDescriptor, ops, require_name

_BASE_CHAIN_KEYS = ("type", "hook", "priority", "prio")


def is_base_chain(fields: Mapping[str, Any]) -> bool:
    return any(fields.get(k) is not None for k in _BASE_CHAIN_KEYS)


CHAIN_DESC = KindDescriptor(
    kind=Kind.CHAIN,
    priority=1,
    key="chain",
    operations=(Operation.ADD, Operation.DELETE, Operation.FLUSH, Operation.RENAME),
    scope=("table",),
    value_field="name",
    value_normalizer=require_name("chain"),
    order=("family", "table", "name", "newname", "type", "hook", "prio", "policy", "dev"),
    fields=(
        FieldSpec(
            "newname",
            operations=ops(Operation.RENAME),
            required=ops(Operation.RENAME),
            validator=NAME,
        ),
        FieldSpec(
            "type",
            operations=ops(Operation.ADD),
            default=DEFAULT_CHAIN_TYPE,
            validator=CHAIN_TYPE,
        ),
        FieldSpec("hook", operations=ops(Operation.ADD), validator=CHAIN_HOOK),
        FieldSpec(
            "prio",
            keys=("priority", "prio"),
            operations=ops(Operation.ADD),
            default=DEFAULT_CHAIN_PRIORITY,
            validator=CHAIN_PRIORITY,
        ),
        FieldSpec("policy", operations=ops(Operation.ADD), validator=CHAIN_POLICY),
        FieldSpec("dev", keys=("dev", "device"), operations=ops(Operation.ADD), validator=NAME),
    ),
    defaults_when=is_base_chain,
)
