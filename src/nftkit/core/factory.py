"""
Command factory: turn a classified field bag into normalized Commands.

Steps (each failure raises before anything is returned):
1. The operation must be valid for the main kind (UnsupportedOperationError).
2. Scope fields are resolved from the bag first, then the context
   (MissingContextError): family always; table for every kind but table; chain
   for rules; collection (the bag's `set`/`map`, or the context) for elements.
3. Operation-specific required fields must be in the bag (MissingFieldError).
4. Defaults are applied on `add` (counter packets/bytes, quota used/over, limit
   burst, base-chain type/prio).
5. Validators run over the given fields (RangeError, InvalidEnumError,
   InvalidFieldError), first violation wins.
6. Rule bodies are resolved to fragment lists; `rules` expands into one command
   per body, in input order, sharing the resolved table/chain.
7. The command body is emitted in the kind's wire order.

The factory is pure: it reads the context it is given and returns a tuple of
Commands. Updating the context is the caller's business.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .classify import Classification
from .context import Context
from .errors import (
    InvalidFieldError,
    MissingContextError,
    MissingFieldError,
    UnsupportedOperationError,
)
from .grammar import Kind, Operation, family_from_value, operation_from_value
from .kinds import FieldSpec, KindDescriptor, get_kind, operations_for_key
from .schema import Command
from .typing import FieldBag, JsonDict

__all__ = [
    "build_commands",
    "resolve_scope",
    "flush_ruleset_command",
]

_SCOPE_WIRE = {"table": "table", "chain": "chain", "collection": "name"}

_SCOPE_HINTS = {
    "table": "pass table=... or add a table first (or set(table=...))",
    "chain": "pass chain=... or add a chain first (or set(chain=...))",
    "collection": "element requires set=... or map=... (or a set/map added earlier)",
}


def _scope_value(name: str, fields: FieldBag, context: Context) -> Any:
    if name == "collection":
        for key in ("set", "map"):
            if fields.get(key) is not None:
                return fields[key]
        return context.collection
    value = fields.get(name)
    return value if value is not None else getattr(context, name)


def resolve_scope(desc: KindDescriptor, fields: FieldBag, context: Context) -> JsonDict:
    """
    Resolve family and the kind's scope fields from the bag, then the context.

    Returns:
        dict[str, Any]: Wire-named scope entries, family first.

    Raises:
        MissingContextError: A scope field is unresolved.
        InvalidEnumError: The family is not a known family.
        InvalidFieldError: A scope value is not a string.
    """
    family = fields.get("family")
    scope: JsonDict = {"family": family_from_value(family if family is not None else context.family).value}
    for name in desc.scope:
        value = _scope_value(name, fields, context)
        if value is None:
            raise MissingContextError(name, _SCOPE_HINTS.get(name))
        if not isinstance(value, str) or not value:
            raise InvalidFieldError(name, f"expected a name, got {value!r}")
        scope[_SCOPE_WIRE[name]] = value
    return scope


def _build_one(
    operation: Operation,
    desc: KindDescriptor,
    value: Any,
    fields: FieldBag,
    scope: JsonDict,
) -> Command:
    bag: Mapping[str, Any] = desc.prepare(operation, value, fields) if desc.prepare else fields

    given: list[tuple[FieldSpec, Any]] = []
    for spec_field in desc.fields:
        if not spec_field.applies_to(operation):
            continue
        found, raw = spec_field.lookup(bag)
        if found:
            given.append((spec_field, raw))
        elif operation in spec_field.required:
            raise MissingFieldError(desc.kind.value, spec_field.bag_keys[0], operation.value)

    spec: JsonDict = dict(scope)
    if desc.emits_value(operation):
        spec[desc.value_field] = desc.value_normalizer(value) if desc.value_normalizer else value

    if operation is Operation.ADD and (desc.defaults_when is None or desc.defaults_when(bag)):
        for spec_field in desc.fields:
            if spec_field.has_default and spec_field.applies_to(operation):
                spec[spec_field.wire] = spec_field.default

    for spec_field, raw in given:
        spec[spec_field.wire] = spec_field.convert(raw)

    ordered = {name: spec[name] for name in desc.order if name in spec}
    return Command(operation=operation, kind=desc.kind, spec=ordered)


def build_commands(
    operation: Operation | str,
    classification: Classification,
    fields: FieldBag,
    context: Context,
) -> tuple[Command, ...]:
    """
    Build the normalized command(s) for one builder call.

    Args:
        operation (Operation | str): Command verb.
        classification (Classification): Output of classify(fields).
        fields (Mapping[str, Any]): The full field bag of the call.
        context (Context): Context to resolve scope from (already merged with the
            call's context fields).

    Returns:
        tuple[Command, ...]: One command, or one per rule body for `rules`.

    Raises:
        UnsupportedOperationError, MissingContextError, MissingFieldError,
        RangeError, InvalidEnumError, InvalidFieldError.
    """
    op = operation_from_value(operation)
    valid = operations_for_key(classification.key)
    if op not in valid:
        raise UnsupportedOperationError(op.value, classification.key, [o.value for o in valid])

    desc = get_kind(classification.kind)
    scope = resolve_scope(desc, fields, context)

    if not classification.plural:
        return (_build_one(op, desc, classification.value, fields, scope),)

    bodies = classification.value
    if not isinstance(bodies, (list, tuple)):
        raise InvalidFieldError("rules", f"expected a list of rule bodies, got {bodies!r}")
    return tuple(_build_one(op, desc, body, fields, scope) for body in bodies)


def flush_ruleset_command(family: Any = None) -> Command:
    """
    Build the whole-ruleset flush command.

    Args:
        family (Any): Optional family restricting the flush; None flushes every family.

    Returns:
        Command: {"flush": {"ruleset": {}}} or {"flush": {"ruleset": {"family": ...}}}.
    """
    spec: JsonDict = {}
    if family is not None:
        spec["family"] = family_from_value(family).value
    return Command(operation=Operation.FLUSH, kind=Kind.RULESET, spec=spec)
