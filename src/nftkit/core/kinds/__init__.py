"""
Kind registry: frozen descriptors for every object kind a command can target.

Notes:
    - One module per kind declares its descriptor (priority, identifying key,
      valid operations, scope fields, wire order and field specs).
    - Identifying keys are the field-bag keys the classifier looks for; `rules` is
      an alias of `rule` at the same priority whose valid operations are narrower.
    - Pure lookups, no state and no side effects.

Examples:
    >>> from nftkit.core.grammar import Kind
    >>> from nftkit.core.kinds import priority_of, schema_of
    >>> priority_of(Kind.CHAIN)
    1
    >>> schema_of(Kind.COUNTER)
    ('family', 'table', 'name', 'packets', 'bytes')
"""

from __future__ import annotations

from types import MappingProxyType

from ..grammar import Kind, Operation
from .base import NO_DEFAULT, FieldSpec, KindDescriptor
from .chains import CHAIN_DESC
from .counters import COUNTER_DESC
from .elements import ELEMENT_DESC
from .flowtables import FLOWTABLE_DESC
from .limits import LIMIT_DESC
from .maps import MAP_DESC
from .quotas import QUOTA_DESC
from .rules import RULE_DESC, RULES_OPERATIONS, resolve_rule_body
from .sets import SET_DESC
from .tables import TABLE_DESC

__all__ = [
    "NO_DEFAULT",
    "FieldSpec",
    "KindDescriptor",
    "IDENTIFYING_KEYS",
    "RULES_KEY",
    "get_kind",
    "list_kinds",
    "priority_of",
    "schema_of",
    "kind_for_key",
    "operations_for_key",
    "resolve_rule_body",
]

RULES_KEY = "rules"

# Registry
_KINDS: dict[Kind, KindDescriptor] = {
    TABLE_DESC.kind: TABLE_DESC,
    CHAIN_DESC.kind: CHAIN_DESC,
    RULE_DESC.kind: RULE_DESC,
    SET_DESC.kind: SET_DESC,
    MAP_DESC.kind: MAP_DESC,
    ELEMENT_DESC.kind: ELEMENT_DESC,
    FLOWTABLE_DESC.kind: FLOWTABLE_DESC,
    COUNTER_DESC.kind: COUNTER_DESC,
    QUOTA_DESC.kind: QUOTA_DESC,
    LIMIT_DESC.kind: LIMIT_DESC,
}

# Field-bag key -> kind, aliases included.
IDENTIFYING_KEYS: MappingProxyType[str, Kind] = MappingProxyType(
    {**{d.key: d.kind for d in _KINDS.values()}, RULES_KEY: Kind.RULE}
)


def get_kind(kind: Kind) -> KindDescriptor:
    """
    Look up the descriptor of a classifiable kind.

    Args:
        kind (Kind): Kind to look up.

    Returns:
        KindDescriptor: Registered descriptor.

    Raises:
        KeyError: For kinds that are never classified (Kind.RULESET).
    """
    return _KINDS[kind]


def list_kinds() -> list[KindDescriptor]:
    """Return all registered descriptors in registry order."""
    return list(_KINDS.values())


def priority_of(kind: Kind) -> int:
    """Classification priority of a kind (higher means more specific)."""
    return _KINDS[kind].priority


def schema_of(kind: Kind) -> tuple[str, ...]:
    """Wire field order of a kind's spec."""
    return _KINDS[kind].order


def kind_for_key(key: str) -> Kind | None:
    """Kind identified by a field-bag key, or None if the key is not identifying."""
    return IDENTIFYING_KEYS.get(key)


def operations_for_key(key: str) -> tuple[Operation, ...]:
    """Valid operations for an identifying key; `rules` is narrower than `rule`."""
    if key == RULES_KEY:
        return RULES_OPERATIONS
    return _KINDS[IDENTIFYING_KEYS[key]].operations
