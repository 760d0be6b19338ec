"""
Descriptor for the 'rule' kind (plural alias 'rules').

Wire spec:
    {"family", "table", "chain", "handle"?, "index"?, "expr", "comment"?}

Operations: add, delete, insert, replace. The plural `rules` key only supports
add and insert and expands into one command per rule body.

Notes:
- replace and delete require `handle`; delete accepts the handle as the rule value
  itself (`delete(rule=42)`) and never emits `expr`.
- insert accepts `handle` or `index` as the position.
- A rule body is either a raw list of fragment mappings or an expression handle
  (anything with `to_list()`, e.g. nftkit.expr.Expr); resolve_rule_body turns both
  into the ordered fragment list.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from ..errors import InvalidFieldError
from ..grammar import Kind, Operation
from ..typing import ExpressionHandle, Fragment
from ..validators import NAME, NON_NEGATIVE
from .base import FieldSpec, KindDescriptor, ops

__all__ = ["RULE_DESC", "RULES_OPERATIONS", "resolve_rule_body"]

RULES_OPERATIONS = (Operation.ADD, Operation.INSERT)


def resolve_rule_body(value: Any) -> list[Fragment]:
    """
    Convert a rule body into its ordered list of nftables expression fragments.

    Args:
        value (Any): Expression handle or list/tuple of fragment mappings.

    Returns:
        list[dict[str, Any]]: Fresh list of fragments (input is not mutated).

    Raises:
        InvalidFieldError: If the value is neither a handle nor a list of mappings.
    """
    if isinstance(value, ExpressionHandle):
        value = value.to_list()
    if not isinstance(value, (list, tuple)):
        raise InvalidFieldError("rule", f"expected an expression or a list of fragments, got {value!r}")
    body: list[Fragment] = []
    for fragment in value:
        if not isinstance(fragment, Mapping):
            raise InvalidFieldError("rule", f"fragment must be a mapping, got {fragment!r}")
        body.append(copy.deepcopy(dict(fragment)))
    return body


def _handle_from_value(
    operation: Operation, value: Any, fields: Mapping[str, Any]
) -> Mapping[str, Any]:
    if (
        operation is Operation.DELETE
        and isinstance(value, int)
        and not isinstance(value, bool)
        and fields.get("handle") is None
    ):
        return {**fields, "handle": value}
    return fields


RULE_DESC = KindDescriptor(
    kind=Kind.RULE,
    priority=2,
    key="rule",
    operations=(Operation.ADD, Operation.DELETE, Operation.INSERT, Operation.REPLACE),
    scope=("table", "chain"),
    value_field="expr",
    value_operations=ops(Operation.ADD, Operation.INSERT, Operation.REPLACE),
    value_normalizer=resolve_rule_body,
    order=("family", "table", "chain", "handle", "index", "expr", "comment"),
    fields=(
        FieldSpec(
            "handle",
            operations=ops(Operation.DELETE, Operation.INSERT, Operation.REPLACE),
            required=ops(Operation.DELETE, Operation.REPLACE),
            validator=NON_NEGATIVE,
        ),
        FieldSpec("index", operations=ops(Operation.INSERT), validator=NON_NEGATIVE),
        FieldSpec(
            "comment",
            operations=ops(Operation.ADD, Operation.INSERT, Operation.REPLACE),
            validator=NAME,
        ),
    ),
    prepare=_handle_from_value,
)
