"""
Descriptor types for the kind registry.

A KindDescriptor declares everything the command factory needs to know about one
object kind: classification priority, identifying key, valid operations, scope
fields, the wire field order and one FieldSpec per optional/required attribute.
Descriptors are frozen and hold no state; the registry in nftkit.core.kinds maps
each Kind to its descriptor.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from ..errors import InvalidFieldError
from ..grammar import Kind, Operation
from ..validators import Validator

__all__ = [
    "NO_DEFAULT",
    "FieldSpec",
    "KindDescriptor",
    "ops",
    "require_name",
]

# Sentinel for FieldSpec.default; None is a legitimate wire value in some specs.
NO_DEFAULT: Final[Any] = object()

Normalizer = Callable[[Any], Any]


def ops(*operations: Operation) -> frozenset[Operation]:
    """Shorthand for a frozenset of operations."""
    return frozenset(operations)


def require_name(field: str) -> Normalizer:
    """Build a normalizer that accepts only non-empty object names."""

    def _name(value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise InvalidFieldError(field, f"expected a non-empty name, got {value!r}")
        return value

    return _name


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """
    One attribute of a kind's wire spec.

    Attributes:
        wire (str): Field name in the nftables JSON spec.
        keys (tuple[str, ...]): Field-bag keys accepted for this field, first match
            wins. Defaults to (wire,).
        operations (frozenset[Operation]): Operations that carry this field; empty
            means every operation of the kind.
        required (frozenset[Operation]): Operations for which the field must be given.
        default (Any): Value applied on `add` when the field is absent (NO_DEFAULT
            for none).
        validator (Validator | None): Checked before normalization.
        normalize (Callable | None): Converts the validated value to its wire form.
    """

    wire: str
    keys: tuple[str, ...] = ()
    operations: frozenset[Operation] = frozenset()
    required: frozenset[Operation] = frozenset()
    default: Any = NO_DEFAULT
    validator: Validator | None = None
    normalize: Normalizer | None = None

    @property
    def bag_keys(self) -> tuple[str, ...]:
        return self.keys or (self.wire,)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def applies_to(self, operation: Operation) -> bool:
        return not self.operations or operation in self.operations

    def lookup(self, fields: Mapping[str, Any]) -> tuple[bool, Any]:
        """Return (found, value) for the first bag key holding a non-None value."""
        for key in self.bag_keys:
            value = fields.get(key)
            if value is not None:
                return True, value
        return False, None

    def convert(self, value: Any) -> Any:
        if self.validator is not None:
            value = self.validator.check(self.bag_keys[0], value)
        if self.normalize is not None:
            value = self.normalize(value)
        return value


@dataclass(frozen=True, slots=True)
class KindDescriptor:
    """
    Frozen registry entry for one object kind.

    Attributes:
        kind (Kind): Kind described.
        priority (int): Classification priority (higher wins the main-object slot).
        key (str): Identifying field-bag key.
        operations (tuple[Operation, ...]): Valid operations, in message order.
        scope (tuple[str, ...]): Scope fields resolved from bag or context
            ("table", "chain", "collection"); family is always resolved.
        value_field (str): Wire field that receives the main value.
        order (tuple[str, ...]): Wire field order of the emitted spec.
        fields (tuple[FieldSpec, ...]): Attribute specs.
        value_operations (frozenset[Operation]): Operations that emit the main value
            (empty means all).
        value_normalizer (Callable | None): Converts the main value to wire form.
        defaults_when (Callable | None): Predicate over the bag gating `add`
            defaults (None means defaults always apply on add).
        prepare (Callable | None): Hook rewriting the bag before field resolution,
            called as prepare(operation, value, fields).
    """

    kind: Kind
    priority: int
    key: str
    operations: tuple[Operation, ...]
    scope: tuple[str, ...]
    value_field: str
    order: tuple[str, ...]
    fields: tuple[FieldSpec, ...] = ()
    value_operations: frozenset[Operation] = frozenset()
    value_normalizer: Normalizer | None = None
    defaults_when: Callable[[Mapping[str, Any]], bool] | None = None
    prepare: Callable[[Operation, Any, Mapping[str, Any]], Mapping[str, Any]] | None = None

    def emits_value(self, operation: Operation) -> bool:
        return not self.value_operations or operation in self.value_operations

    def field_names(self) -> tuple[str, ...]:
        return tuple(f.wire for f in self.fields)

    def required_fields(self, operation: Operation) -> tuple[str, ...]:
        return tuple(f.bag_keys[0] for f in self.fields if operation in f.required)

    def defaults(self) -> dict[str, Any]:
        return {f.wire: f.default for f in self.fields if f.has_default}
